import pytest

from spotterm.cli_parser import UsageError, build_parser, parse_args
from spotterm.formatting import Flag, ItemType, JumpDirection


def test_no_subcommand_gives_none():
    ns = parse_args([])
    assert ns.command is None


def test_build_parser_parses_playback_toggle():
    ns = build_parser().parse_args(["playback", "--toggle"])
    assert ns.toggle is True
    assert ns.share_track is False


@pytest.mark.parametrize(
    "alias, name",
    [("pb", "playback"), ("p", "play"), ("l", "list"), ("s", "search")],
)
def test_aliases_map_to_canonical_names(alias, name):
    extra = {
        "playback": [],
        "play": ["--uri", "spotify:track:abc"],
        "list": ["--devices"],
        "search": ["query", "--tracks"],
    }[name]
    assert parse_args([alias, *extra]).command == name


def test_playback_default_format():
    ns = parse_args(["playback"])
    assert ns.format == "%f %s %t - %a"


@pytest.mark.parametrize(
    "argv, expected",
    [
        (["--seek", "+10"], "%f %s %t - %a %r"),
        (["--volume", "50"], "%v% %f %s %t - %a"),
        (["--transfer", "Kitchen"], "%f %s %t - %a on %d"),
    ],
)
def test_playback_conditional_formats(argv, expected):
    assert parse_args(["pb", *argv]).format == expected


def test_explicit_format_kept():
    ns = parse_args(["pb", "--volume", "20", "-f", "playing on %d at %v%"])
    assert ns.format == "playing on %d at %v%"
    assert ns.volume == "20"


def test_seek_accepts_negative_value():
    ns = parse_args(["pb", "--seek", "-10"])
    assert ns.seek == "-10"


def test_next_counts_occurrences():
    ns = parse_args(["pb", "-nnn"])
    assert JumpDirection.from_matches(ns) == (JumpDirection.NEXT, 3)


def test_previous_counts_occurrences():
    ns = parse_args(["pb", "-pp"])
    assert JumpDirection.from_matches(ns) == (JumpDirection.PREVIOUS, 2)


def test_flags_and_actions_combine():
    ns = parse_args(["pb", "--like", "--shuffle", "--toggle", "--status"])
    assert Flag.from_matches(ns) == [Flag.LIKE, Flag.SHUFFLE]
    assert ns.toggle and ns.status


@pytest.mark.parametrize(
    "argv",
    [
        ["--next", "--toggle"],
        ["--next", "--previous"],
        ["--previous", "--like"],
        ["--like", "--dislike"],
        ["--share-track", "--shuffle"],
        ["--share-track", "--share-album"],
        ["--share-album", "--volume", "10"],
        ["--share-track", "--next"],
    ],
)
def test_playback_conflicts(argv):
    with pytest.raises(UsageError):
        parse_args(["playback", *argv])


def test_conflict_message_names_options():
    with pytest.raises(UsageError, match="--next"):
        parse_args(["pb", "--next", "--toggle"])


def test_play_requires_uri_or_name():
    with pytest.raises(UsageError):
        parse_args(["play"])


def test_play_uri_and_name_conflict():
    with pytest.raises(UsageError):
        parse_args(["play", "--uri", "spotify:track:abc", "--name", "x", "--track"])


def test_play_name_requires_context():
    with pytest.raises(UsageError, match="--name"):
        parse_args(["play", "--name", "Song"])


def test_play_name_with_context():
    ns = parse_args(["play", "--name", "Song", "--playlist", "--random"])
    assert ns.name == "Song"
    assert ItemType.play_from_matches(ns) is ItemType.PLAYLIST
    assert ns.format == "%f %s %t - %a"


def test_play_two_contexts_conflict():
    with pytest.raises(UsageError):
        parse_args(["play", "--name", "x", "--track", "--album"])


def test_play_queue_conflicts_with_album():
    with pytest.raises(UsageError):
        parse_args(["play", "--name", "x", "--album", "--queue"])


def test_play_random_conflicts_with_track():
    with pytest.raises(UsageError):
        parse_args(["play", "--name", "x", "--track", "--random"])


def test_play_queue_with_track_allowed():
    ns = parse_args(["p", "-n", "x", "-t", "-q"])
    assert ns.queue is True
    assert ItemType.play_from_matches(ns) is ItemType.TRACK


@pytest.mark.parametrize(
    "flag, expected, kind",
    [
        ("--devices", "%v% %d", ItemType.DEVICE),
        ("--liked", "%t - %a (%u)", ItemType.LIKED),
        ("--playlists", "%p (%u)", ItemType.PLAYLIST),
    ],
)
def test_list_formats(flag, expected, kind):
    ns = parse_args(["list", flag])
    assert ns.format == expected
    assert ItemType.list_from_matches(ns) is kind


def test_list_requires_a_listable():
    with pytest.raises(UsageError):
        parse_args(["list"])


def test_list_listables_exclusive():
    with pytest.raises(UsageError):
        parse_args(["list", "--devices", "--liked"])


def test_list_limit_kept_as_text():
    ns = parse_args(["list", "--liked", "--limit", "50"])
    assert ns.limit == "50"


@pytest.mark.parametrize(
    "flag, expected, kind",
    [
        ("--tracks", "%t - %a (%u)", ItemType.TRACK),
        ("--playlists", "%p (%u)", ItemType.PLAYLIST),
        ("--artists", "%a (%u)", ItemType.ARTIST),
        ("--albums", "%b - %a (%u)", ItemType.ALBUM),
        ("--shows", "%h - %a (%u)", ItemType.SHOW),
    ],
)
def test_search_formats(flag, expected, kind):
    ns = parse_args(["search", "hello", flag])
    assert ns.search == "hello"
    assert ns.format == expected
    assert ItemType.search_from_matches(ns) is kind


def test_search_requires_query():
    with pytest.raises(UsageError):
        parse_args(["search", "--tracks"])


def test_search_requires_type():
    with pytest.raises(UsageError):
        parse_args(["search", "hello"])


def test_search_types_exclusive():
    with pytest.raises(UsageError):
        parse_args(["search", "hello", "--tracks", "--albums"])


def test_unknown_option_raises():
    with pytest.raises(UsageError):
        parse_args(["playback", "--bogus"])


def test_no_abbreviations():
    with pytest.raises(UsageError):
        parse_args(["playback", "--share"])