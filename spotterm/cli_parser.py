"""Command-line parser for the playback, play, list and search subcommands."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from typing import Sequence


class UsageError(Exception):
    """The command line does not match what a subcommand accepts."""


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        raise UsageError(message)


@dataclass(frozen=True)
class _Group:
    name: str
    args: tuple[str, ...]
    multiple: bool = False
    required: bool = False
    conflicts: tuple[str, ...] = ()


@dataclass(frozen=True)
class _Rules:
    groups: tuple[_Group, ...] = ()
    arg_conflicts: dict[str, tuple[str, ...]] = field(default_factory=dict)
    arg_requires: dict[str, str] = field(default_factory=dict)
    format_default: str | None = None
    format_ifs: tuple[tuple[str, str], ...] = ()


_ALIASES = {"pb": "playback", "p": "play", "l": "list", "s": "search"}

_FORMAT_HELP = (
    "Specifies the output format. There are multiple format specifiers you can use: "
    "%%a: artist, %%b: album, %%p: playlist, %%t: track, %%h: show, "
    "%%f: flags (shuffle, repeat, like), %%s: playback status, %%v: volume, "
    "%%d: current device. Example: spt pb -s -f 'playing on %%d at %%v%%'"
)

_RULES = {
    "playback": _Rules(
        groups=(
            _Group("jumps", ("next", "previous"), conflicts=("single", "flags", "actions")),
            _Group("likes", ("like", "dislike")),
            _Group(
                "flags",
                ("like", "dislike", "shuffle", "repeat"),
                multiple=True,
                conflicts=("single", "jumps"),
            ),
            _Group(
                "actions",
                ("toggle", "status", "transfer", "volume"),
                multiple=True,
                conflicts=("single", "jumps"),
            ),
            _Group(
                "single",
                ("share-track", "share-album"),
                conflicts=("actions", "flags", "jumps"),
            ),
        ),
        format_default="%f %s %t - %a",
        format_ifs=(
            ("seek", "%f %s %t - %a %r"),
            ("volume", "%v% %f %s %t - %a"),
            ("transfer", "%f %s %t - %a on %d"),
        ),
    ),
    "play": _Rules(
        groups=(
            _Group("contexts", ("track", "artist", "playlist", "album", "show")),
            _Group("actions", ("uri", "name"), required=True),
        ),
        arg_conflicts={
            "queue": ("album", "artist", "playlist", "show"),
            "random": ("track", "album", "artist", "show"),
        },
        arg_requires={"name": "contexts"},
        format_default="%f %s %t - %a",
    ),
    "list": _Rules(
        groups=(_Group("listable", ("devices", "playlists", "liked"), required=True),),
        format_ifs=(
            ("devices", "%v% %d"),
            ("liked", "%t - %a (%u)"),
            ("playlists", "%p (%u)"),
        ),
    ),
    "search": _Rules(
        groups=(
            _Group(
                "searchable",
                ("playlists", "tracks", "albums", "artists", "shows"),
                required=True,
            ),
        ),
        format_ifs=(
            ("tracks", "%t - %a (%u)"),
            ("playlists", "%p (%u)"),
            ("artists", "%a (%u)"),
            ("albums", "%b - %a (%u)"),
            ("shows", "%h - %a (%u)"),
        ),
    ),
}


def _add_device(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-d", "--device", metavar="DEVICE", help="Specifies the spotify device to use"
    )


def _add_format(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-f", "--format", metavar="FORMAT", help=_FORMAT_HELP)


def _flag(parser: argparse.ArgumentParser, *names: str, help: str) -> None:
    parser.add_argument(*names, action="store_true", help=help)


def _add_playback(subparsers) -> None:
    parser = subparsers.add_parser(
        "playback",
        aliases=["pb"],
        allow_abbrev=False,
        help="Interacts with the playback of a device",
        description=(
            "Use `playback` to interact with the playback of the current or any other "
            "device. If no options were provided, the current playback is displayed. "
            "`--next` and `--previous` cannot be used with other options; "
            "`--share-track` and `--share-album` cannot be used with other options."
        ),
    )
    _add_device(parser)
    _add_format(parser)
    _flag(parser, "-t", "--toggle", help="Pauses/resumes the playback of a device")
    _flag(parser, "-s", "--status", help="Prints out the current status of a device (default)")
    _flag(parser, "--share-track", help="Returns the url to the current track")
    _flag(parser, "--share-album", help="Returns the url to the album of the current track")
    parser.add_argument(
        "--transfer", metavar="DEVICE", help="Transfers the playback to new DEVICE"
    )
    _flag(parser, "--like", help="Likes the current song if possible")
    _flag(parser, "--dislike", help="Dislikes the current song if possible")
    _flag(parser, "--shuffle", help="Toggles shuffle mode")
    _flag(parser, "--repeat", help="Switches between repeat modes")
    parser.add_argument(
        "-n", "--next", action="count", default=0, help="Jumps to the next song"
    )
    parser.add_argument(
        "-p", "--previous", action="count", default=0, help="Jumps to the previous song"
    )
    parser.add_argument(
        "--seek",
        metavar="±SECONDS",
        help="Jumps SECONDS forwards (+) or backwards (-)",
    )
    parser.add_argument(
        "-v", "--volume", metavar="VOLUME", help="Sets the volume of a device to VOLUME (1 - 100)"
    )


def _add_play(subparsers) -> None:
    parser = subparsers.add_parser(
        "play",
        aliases=["p"],
        allow_abbrev=False,
        help="Plays a uri or another spotify item by name",
        description=(
            "If you specify a uri, the type can be inferred. If you want to play something "
            "by name, you have to specify the type. The first item found is played."
        ),
    )
    _add_device(parser)
    _add_format(parser)
    parser.add_argument("-u", "--uri", metavar="URI", help="Plays the URI")
    parser.add_argument(
        "-n",
        "--name",
        metavar="NAME",
        help="Plays the first match with NAME from the specified category",
    )
    _flag(parser, "-q", "--queue", help="Adds track to queue instead of playing it directly")
    _flag(parser, "-r", "--random", help="Plays a random track (only works with playlists)")
    _flag(parser, "-b", "--album", help="Looks for an album")
    _flag(parser, "-a", "--artist", help="Looks for an artist")
    _flag(parser, "-t", "--track", help="Looks for a track")
    _flag(parser, "-w", "--show", help="Looks for a show")
    _flag(parser, "-p", "--playlist", help="Looks for a playlist")


def _add_list(subparsers) -> None:
    parser = subparsers.add_parser(
        "list",
        aliases=["l"],
        allow_abbrev=False,
        help="Lists devices, liked songs and playlists",
        description="This will list devices, liked songs or playlists.",
    )
    _add_format(parser)
    _flag(parser, "-d", "--devices", help="Lists devices")
    _flag(parser, "-p", "--playlists", help="Lists playlists")
    _flag(parser, "--liked", help="Lists liked songs")
    parser.add_argument(
        "--limit", help="Specifies the maximum number of results (1 - 50)"
    )


def _add_search(subparsers) -> None:
    parser = subparsers.add_parser(
        "search",
        aliases=["s"],
        allow_abbrev=False,
        help="Searches for tracks, albums and more",
        description=(
            "This will search for something on spotify and display the items. "
            "The type can't be inferred, so you have to specify it."
        ),
    )
    _add_format(parser)
    parser.add_argument("search", metavar="SEARCH", help="Specifies the search query")
    _flag(parser, "-b", "--albums", help="Looks for albums")
    _flag(parser, "-a", "--artists", help="Looks for artists")
    _flag(parser, "-p", "--playlists", help="Looks for playlists")
    _flag(parser, "-t", "--tracks", help="Looks for tracks")
    _flag(parser, "-w", "--shows", help="Looks for shows")
    parser.add_argument(
        "--limit", help="Specifies the maximum number of results (1 - 50)"
    )


def build_parser() -> argparse.ArgumentParser:
    """Return the parser with all subcommands; errors raise UsageError."""
    parser = _Parser(prog="spt", allow_abbrev=False)
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    _add_playback(subparsers)
    _add_play(subparsers)
    _add_list(subparsers)
    _add_search(subparsers)
    return parser


def _present(ns: argparse.Namespace, name: str) -> bool:
    value = getattr(ns, name.replace("-", "_"), None)
    return value is not None and value is not False and value != 0


def _option(name: str) -> str:
    return f"--{name}"


def _check(ns: argparse.Namespace, rules: _Rules) -> None:
    groups = {group.name: group for group in rules.groups}
    hits = {
        group.name: [arg for arg in group.args if _present(ns, arg)] for group in rules.groups
    }

    for group in rules.groups:
        found = hits[group.name]
        if not group.multiple and len(found) > 1:
            raise UsageError(
                f"the argument '{_option(found[0])}' cannot be used with '{_option(found[1])}'"
            )
        if group.required and not found:
            wanted = ", ".join(_option(arg) for arg in group.args)
            raise UsageError(f"one of the arguments {wanted} is required")

    for group in rules.groups:
        if not hits[group.name]:
            continue
        for other in group.conflicts:
            if hits[other]:
                raise UsageError(
                    f"the argument '{_option(hits[group.name][0])}' cannot be used "
                    f"with '{_option(hits[other][0])}'"
                )

    for arg, conflicts in rules.arg_conflicts.items():
        if not _present(ns, arg):
            continue
        for other in conflicts:
            if _present(ns, other):
                raise UsageError(
                    f"the argument '{_option(arg)}' cannot be used with '{_option(other)}'"
                )

    for arg, group_name in rules.arg_requires.items():
        if _present(ns, arg) and not hits[group_name]:
            wanted = ", ".join(_option(a) for a in groups[group_name].args)
            raise UsageError(f"the argument '{_option(arg)}' requires one of {wanted}")


def _resolve_format(ns: argparse.Namespace, rules: _Rules) -> None:
    if ns.format is not None:
        return
    for trigger, value in rules.format_ifs:
        if _present(ns, trigger):
            ns.format = value
            return
    ns.format = rules.format_default


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse ``argv`` and enforce the subcommands' argument rules.

    ``command`` is the canonical subcommand name, or None when none was given;
    ``format`` is filled with the subcommand's default when not given.
    """
    ns = build_parser().parse_args(argv)
    if ns.command is None:
        return ns
    ns.command = _ALIASES.get(ns.command, ns.command)
    rules = _RULES[ns.command]
    _check(ns, rules)
    _resolve_format(ns, rules)
    return ns