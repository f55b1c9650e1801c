"""Command-line selection helpers and the ``--format`` template engine."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any


def _get(obj: Any, name: str, default: Any = None) -> Any:
    if isinstance(obj, Mapping):
        return obj.get(name, default)
    return getattr(obj, name, default)


def _count(matches: Any, name: str) -> int:
    value = _get(matches, name)
    if value is None:
        value = _get(matches, name.replace("-", "_"))
    if value is None or value is False:
        return 0
    if value is True:
        return 1
    if isinstance(value, int):
        return value
    return 1


def _present(matches: Any, name: str) -> bool:
    return _count(matches, name) > 0


def _first_present(matches: Any, choices: Iterable[tuple[str, Any]], what: str):
    for name, result in choices:
        if _present(matches, name):
            return result
    raise ValueError(f"no {what} selected")


class RepeatState(Enum):
    OFF = "off"
    TRACK = "track"
    CONTEXT = "context"


class ItemType(Enum):
    """Kinds of item that can be played, searched for or listed."""

    PLAYLIST = "playlist"
    TRACK = "track"
    ARTIST = "artist"
    ALBUM = "album"
    SHOW = "show"
    DEVICE = "device"
    LIKED = "liked"

    @classmethod
    def play_from_matches(cls, matches: Any) -> ItemType:
        return _first_present(
            matches,
            [
                ("playlist", cls.PLAYLIST),
                ("track", cls.TRACK),
                ("artist", cls.ARTIST),
                ("album", cls.ALBUM),
                ("show", cls.SHOW),
            ],
            "item type",
        )

    @classmethod
    def search_from_matches(cls, matches: Any) -> ItemType:
        return _first_present(
            matches,
            [
                ("playlists", cls.PLAYLIST),
                ("tracks", cls.TRACK),
                ("artists", cls.ARTIST),
                ("albums", cls.ALBUM),
                ("shows", cls.SHOW),
            ],
            "search type",
        )

    @classmethod
    def list_from_matches(cls, matches: Any) -> ItemType:
        return _first_present(
            matches,
            [("playlists", cls.PLAYLIST), ("devices", cls.DEVICE), ("liked", cls.LIKED)],
            "list type",
        )


class Flag(Enum):
    """Playback flags; like and dislike set the saved state rather than toggle it."""

    LIKE = "like"
    DISLIKE = "dislike"
    SHUFFLE = "shuffle"
    REPEAT = "repeat"

    @classmethod
    def from_matches(cls, matches: Any) -> list[Flag]:
        flags = []
        if _present(matches, "like"):
            flags.append(cls.LIKE)
        elif _present(matches, "dislike"):
            flags.append(cls.DISLIKE)
        if _present(matches, "shuffle"):
            flags.append(cls.SHUFFLE)
        if _present(matches, "repeat"):
            flags.append(cls.REPEAT)
        return flags


class JumpDirection(Enum):
    NEXT = "next"
    PREVIOUS = "previous"

    @classmethod
    def from_matches(cls, matches: Any) -> tuple[JumpDirection, int]:
        """Return the direction and how many times it was given."""
        for direction in (cls.NEXT, cls.PREVIOUS):
            count = _count(matches, direction.value)
            if count:
                return direction, count
        raise ValueError("no jump direction selected")


class FormatKind(Enum):
    """Formattable values; the value is the template placeholder."""

    ALBUM = "%b"
    ARTIST = "%a"
    PLAYLIST = "%p"
    TRACK = "%t"
    SHOW = "%h"
    URI = "%u"
    DEVICE = "%d"
    VOLUME = "%v"
    POSITION = "%r"
    FLAGS = "%f"
    PLAYING = "%s"


@dataclass(frozen=True)
class Icons:
    liked_icon: str
    shuffle_icon: str
    repeat_track_icon: str
    repeat_context_icon: str
    playing_icon: str
    paused_icon: str


def _minutes(ms: int) -> str:
    seconds = ms // 1000
    return f"{seconds // 60}:{seconds % 60:02}"


def _display_track_progress(progress_ms: int, duration_ms: int) -> str:
    return f"{_minutes(progress_ms)}/{_minutes(duration_ms)}"


@dataclass(frozen=True)
class Format:
    """A value for one placeholder.

    ``value`` is a string for text kinds, an int for VOLUME, a
    ``(progress_ms, duration_ms)`` pair for POSITION, a
    ``(RepeatState, shuffle, liked)`` triple for FLAGS and a bool for PLAYING.
    """

    kind: FormatKind
    value: Any

    def placeholder(self) -> str:
        return self.kind.value

    def render(self, icons: Icons) -> str:
        kind = self.kind
        if kind is FormatKind.POSITION:
            progress, duration = self.value
            return _display_track_progress(progress, duration)
        if kind is FormatKind.FLAGS:
            repeat, shuffle, liked = self.value
            repeat_icon = {
                RepeatState.OFF: "",
                RepeatState.TRACK: icons.repeat_track_icon,
                RepeatState.CONTEXT: icons.repeat_context_icon,
            }[repeat]
            parts = [
                icons.shuffle_icon if shuffle else "",
                repeat_icon,
                icons.liked_icon if liked else "",
            ]
            return " ".join(part for part in parts if part)
        if kind is FormatKind.PLAYING:
            return icons.playing_icon if self.value else icons.paused_icon
        return str(self.value)


def join_artists(artists: Iterable[Any]) -> str:
    return ", ".join(_get(artist, "name") for artist in artists)


def formats_for_album(album: Any) -> list[Format]:
    values = [
        Format(FormatKind.ALBUM, _get(album, "name")),
        Format(FormatKind.ARTIST, join_artists(_get(album, "artists", ()))),
    ]
    uri = _get(album, "uri")
    if uri is not None:
        values.append(Format(FormatKind.URI, uri))
    return values


def formats_for_artist(artist: Any) -> list[Format]:
    return [
        Format(FormatKind.ARTIST, _get(artist, "name")),
        Format(FormatKind.URI, _get(artist, "uri")),
    ]


def formats_for_playlist(playlist: Any) -> list[Format]:
    return [
        Format(FormatKind.PLAYLIST, _get(playlist, "name")),
        Format(FormatKind.URI, _get(playlist, "uri")),
    ]


def formats_for_track(track: Any) -> list[Format]:
    return [
        Format(FormatKind.ALBUM, _get(_get(track, "album"), "name")),
        Format(FormatKind.ARTIST, join_artists(_get(track, "artists", ()))),
        Format(FormatKind.TRACK, _get(track, "name")),
        Format(FormatKind.URI, _get(track, "uri")),
    ]


def formats_for_show(show: Any) -> list[Format]:
    return [
        Format(FormatKind.ARTIST, _get(show, "publisher")),
        Format(FormatKind.SHOW, _get(show, "name")),
        Format(FormatKind.URI, _get(show, "uri")),
    ]


def formats_for_episode(episode: Any) -> list[Format]:
    show = _get(episode, "show")
    return [
        Format(FormatKind.SHOW, _get(show, "name")),
        Format(FormatKind.ARTIST, _get(show, "publisher")),
        Format(FormatKind.TRACK, _get(episode, "name")),
        Format(FormatKind.URI, _get(episode, "uri")),
    ]


_UNSUPPORTED = ("%a", "%b", "%t", "%p", "%h", "%u", "%d", "%v", "%f", "%s")


def format_output(template: str, values: Iterable[Format], icons: Icons) -> str:
    """Fill ``template`` with ``values``; placeholders left over become ``None``."""
    for value in values:
        template = template.replace(value.placeholder(), value.render(icons))
    for placeholder in _UNSUPPORTED:
        template = template.replace(placeholder, "None")
    return template.strip()