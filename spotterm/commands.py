"""Argument checks and lookups behind the command-line playback actions."""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from typing import Any

_SHARE_ERROR = "failed to generate a shareable url for the current song"
_LIMIT_ERROR = "limit must be between 1 and 50"
_VOLUME_ERROR = "volume must be between 0 and 100"
_SEEK_ERROR = "failed to convert seconds to i32"

_MAX_LIMIT = 50
_MAX_VOLUME = 100
_U32_MAX = 0xFFFF_FFFF
_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1

_UNSIGNED = re.compile(r"\+?[0-9]+")
_SIGNED = re.compile(r"[+-]?[0-9]+")


class CommandError(Exception):
    """A command could not be carried out with the given arguments or state."""


def _get(obj: Any, name: str, default: Any = None) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(name, default)
    return getattr(obj, name, default)


def _parse_u32(value: str) -> int | None:
    if not _UNSIGNED.fullmatch(value):
        return None
    number = int(value)
    return number if number <= _U32_MAX else None


def parse_limit(value: str) -> int:
    """Return the search limit in ``value``; it must lie between 1 and 50."""
    number = _parse_u32(value)
    if number is None or not 1 <= number <= _MAX_LIMIT:
        raise CommandError(_LIMIT_ERROR)
    return number


def parse_volume(value: str) -> int:
    """Return the volume in ``value``; it must lie between 0 and 100."""
    number = _parse_u32(value)
    if number is None or number > _MAX_VOLUME:
        raise CommandError(_VOLUME_ERROR)
    return number


def seek_target(seconds_str: str, current_pos: int, duration: int) -> int | None:
    """Return the position in ms to seek to, or None to skip to the next track.

    ``+N`` moves N seconds forwards, ``-N`` N seconds backwards (not before
    the start) and a plain ``N`` goes to the Nth second of the track.
    """
    if not _SIGNED.fullmatch(seconds_str):
        raise CommandError(_SEEK_ERROR)
    signed = int(seconds_str)
    if not _I32_MIN <= signed <= _I32_MAX:
        raise CommandError(_SEEK_ERROR)
    ms = abs(signed) * 1000

    if seconds_str.startswith("+"):
        position = current_pos + ms
    elif seconds_str.startswith("-"):
        position = max(current_pos - ms, 0)
    else:
        position = ms

    return None if position > duration else position


def _is_episode(item: Any) -> bool:
    kind = _get(item, "type")
    if kind is not None:
        return kind == "episode"
    return _get(item, "album") is None and _get(item, "show") is not None


def share_track_url(item: Any) -> str:
    """Return the shareable url of the playing track or episode."""
    if item is None:
        raise CommandError(_SHARE_ERROR)
    if _is_episode(item):
        return f"https://open.spotify.com/episode/{_get(item, 'id') or ''}"
    return f"https://open.spotify.com/track/{_get(item, 'id') or ''}"


def share_album_url(item: Any) -> str:
    """Return the shareable url of the album or show of the playing item."""
    if item is None:
        raise CommandError(_SHARE_ERROR)
    if _is_episode(item):
        return f"https://open.spotify.com/show/{_get(_get(item, 'show'), 'id') or ''}"
    return f"https://open.spotify.com/album/{_get(_get(item, 'album'), 'id') or ''}"


def find_device_id(devices: Iterable[Any] | None, name: str) -> str:
    """Return the id of the first device called ``name``."""
    device_id = next(
        (_get(device, "id") or "" for device in devices or () if _get(device, "name") == name),
        "",
    )
    if not device_id:
        raise CommandError(f"no device with name '{name}'")
    return device_id


def device_index_by_name(devices: Iterable[Any] | None, name: str) -> int:
    """Return the index of the last device called ``name``, or 0 if none is.

    Raises CommandError when no device list is available at all.
    """
    if devices is None:
        raise CommandError("no device available")
    index = 0
    for position, device in enumerate(devices):
        if _get(device, "name") == name:
            index = position
    return index