from types import SimpleNamespace

import pytest

from spotterm.formatting import (
    Flag,
    Format,
    FormatKind,
    Icons,
    ItemType,
    JumpDirection,
    RepeatState,
    format_output,
    formats_for_album,
    formats_for_artist,
    formats_for_episode,
    formats_for_playlist,
    formats_for_show,
    formats_for_track,
    join_artists,
)

ICONS = Icons(
    liked_icon="L",
    shuffle_icon="S",
    repeat_track_icon="T",
    repeat_context_icon="C",
    playing_icon="P",
    paused_icon="||",
)

TRACK = {
    "name": "Song",
    "uri": "spotify:track:abc",
    "album": {"name": "Record"},
    "artists": [{"name": "Ann"}, {"name": "Bob"}],
}


def test_join_artists():
    assert join_artists([{"name": "Ann"}, {"name": "Bob"}]) == "Ann, Bob"
    assert join_artists([]) == ""


def test_join_artists_accepts_objects():
    assert join_artists([SimpleNamespace(name="Solo")]) == "Solo"


def test_track_formats_order():
    values = formats_for_track(TRACK)
    assert [v.kind for v in values] == [
        FormatKind.ALBUM,
        FormatKind.ARTIST,
        FormatKind.TRACK,
        FormatKind.URI,
    ]
    assert [v.value for v in values] == ["Record", "Ann, Bob", "Song", "spotify:track:abc"]


def test_album_uri_is_optional():
    album = {"name": "Record", "artists": [{"name": "Ann"}], "uri": None}
    assert [v.kind for v in formats_for_album(album)] == [FormatKind.ALBUM, FormatKind.ARTIST]
    album["uri"] = "spotify:album:x"
    assert formats_for_album(album)[-1] == Format(FormatKind.URI, "spotify:album:x")


def test_simple_item_formats():
    assert formats_for_artist({"name": "Ann", "uri": "u1"}) == [
        Format(FormatKind.ARTIST, "Ann"),
        Format(FormatKind.URI, "u1"),
    ]
    assert formats_for_playlist({"name": "Mix", "uri": "u2"}) == [
        Format(FormatKind.PLAYLIST, "Mix"),
        Format(FormatKind.URI, "u2"),
    ]
    assert formats_for_show({"name": "Talk", "publisher": "Pub", "uri": "u3"}) == [
        Format(FormatKind.ARTIST, "Pub"),
        Format(FormatKind.SHOW, "Talk"),
        Format(FormatKind.URI, "u3"),
    ]


def test_episode_formats():
    episode = {"name": "Ep", "uri": "u4", "show": {"name": "Talk", "publisher": "Pub"}}
    assert formats_for_episode(episode) == [
        Format(FormatKind.SHOW, "Talk"),
        Format(FormatKind.ARTIST, "Pub"),
        Format(FormatKind.TRACK, "Ep"),
        Format(FormatKind.URI, "u4"),
    ]


def test_format_output_fills_template():
    assert format_output("%t - %a", formats_for_track(TRACK), ICONS) == "Song - Ann, Bob"


def test_format_output_replaces_missing_with_none():
    assert format_output("%p on %d", [], ICONS) == "None on None"


def test_format_output_keeps_unknown_position_placeholder():
    assert format_output("%r", [], ICONS) == "%r"


def test_format_output_strips_whitespace():
    assert format_output("  %t  ", [Format(FormatKind.TRACK, "Song")], ICONS) == "Song"


def test_placeholder_matches_kind():
    assert Format(FormatKind.SHOW, "x").placeholder() == "%h"
    for kind in FormatKind:
        assert Format(kind, None).placeholder() == kind.value


def test_render_volume_and_playing():
    assert Format(FormatKind.VOLUME, 42).render(ICONS) == "42"
    assert Format(FormatKind.PLAYING, True).render(ICONS) == ICONS.playing_icon
    assert Format(FormatKind.PLAYING, False).render(ICONS) == ICONS.paused_icon


def test_render_flags_order_and_filtering():
    all_on = Format(FormatKind.FLAGS, (RepeatState.TRACK, True, True)).render(ICONS)
    assert all_on.split(" ") == ["S", "T", "L"]
    context = Format(FormatKind.FLAGS, (RepeatState.CONTEXT, False, False)).render(ICONS)
    assert context == ICONS.repeat_context_icon
    assert Format(FormatKind.FLAGS, (RepeatState.OFF, False, False)).render(ICONS) == ""


def test_render_position():
    assert Format(FormatKind.POSITION, (65000, 180000)).render(ICONS) == "1:05/3:00"


@pytest.mark.parametrize(
    "matches, expected",
    [
        ({"playlist": True}, ItemType.PLAYLIST),
        ({"track": True}, ItemType.TRACK),
        ({"artist": True}, ItemType.ARTIST),
        ({"album": True}, ItemType.ALBUM),
        ({"show": True}, ItemType.SHOW),
    ],
)
def test_play_from_matches(matches, expected):
    assert ItemType.play_from_matches(matches) is expected


def test_search_from_matches_with_namespace():
    ns = SimpleNamespace(playlists=False, tracks=False, artists=False, albums=True, shows=False)
    assert ItemType.search_from_matches(ns) is ItemType.ALBUM


def test_list_from_matches():
    assert ItemType.list_from_matches({"devices": True}) is ItemType.DEVICE
    assert ItemType.list_from_matches({"liked": True}) is ItemType.LIKED


def test_nothing_selected_raises():
    with pytest.raises(ValueError):
        ItemType.play_from_matches({})
    with pytest.raises(ValueError):
        JumpDirection.from_matches({"next": 0})


def test_flags_from_matches():
    assert Flag.from_matches({"like": True, "shuffle": True}) == [Flag.LIKE, Flag.SHUFFLE]
    assert Flag.from_matches({"dislike": True, "repeat": True}) == [Flag.DISLIKE, Flag.REPEAT]
    assert Flag.from_matches({"like": True, "dislike": True}) == [Flag.LIKE]
    assert Flag.from_matches({}) == []


def test_jump_from_matches_counts_occurrences():
    assert JumpDirection.from_matches({"previous": 3}) == (JumpDirection.PREVIOUS, 3)
    assert JumpDirection.from_matches({"next": True}) == (JumpDirection.NEXT, 1)