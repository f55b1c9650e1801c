"""Application state of the terminal front end and the actions that change it."""

from __future__ import annotations

import time
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Callable

from .commands import share_album_url, share_track_url
from .state import (
    DEFAULT_ROUTE,
    ActiveBlock,
    AlbumTableContext,
    Behavior,
    EpisodeTableContext,
    IoEvent,
    Library,
    ResultAndSelectedIndex,
    Route,
    RouteId,
    SearchResult,
    TrackTable,
)

POLL_INTERVAL_MS = 5_000
RESTART_THRESHOLD_MS = 3_000
MAX_VOLUME = 100

MADE_FOR_YOU_PLAYLISTS = (
    "Discover Weekly",
    "Release Radar",
    "On Repeat",
    "Repeat Rewind",
    "Daily Drive",
)

DEFAULT_BEHAVIOR = Behavior(seek_milliseconds=5_000, volume_increment=10)


def _get(obj: Any, name: str, default: Any = None) -> Any:
    if obj is None:
        return default
    if isinstance(obj, Mapping):
        return obj.get(name, default)
    return getattr(obj, name, default)


def _is_episode(item: Any) -> bool:
    kind = _get(item, "type")
    if kind is not None:
        return kind == "episode"
    return _get(item, "album") is None and _get(item, "show") is not None


def _item_at(items: Any, index: int | None) -> Any:
    if items is None or index is None or not 0 <= index < len(items):
        return None
    return items[index]


class App:
    """Everything the front end shows, plus the requests it sends to the network worker.

    ``sender`` receives each IoEvent; ``clipboard`` receives text to copy;
    ``clock`` returns a monotonic time in seconds.
    """

    def __init__(
        self,
        sender: Callable[[IoEvent], Any] | None = None,
        behavior: Behavior | None = None,
        token_expiry: datetime | None = None,
        clipboard: Callable[[str], Any] | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._sender = sender
        self._clock = clock
        self.behavior = behavior if behavior is not None else DEFAULT_BEHAVIOR
        self.spotify_token_expiry = token_expiry if token_expiry is not None else datetime.now()
        self.clipboard = clipboard

        self.instant_since_last_current_playback_poll = clock()
        self._navigation_stack: list[Route] = [
            Route(DEFAULT_ROUTE.id, DEFAULT_ROUTE.active_block, DEFAULT_ROUTE.hovered_block)
        ]
        self.audio_analysis: Any = None
        self.home_scroll = 0
        self.artists: list = []
        self.artist: Any = None
        self.album_table_context = AlbumTableContext.FULL
        self.saved_album_tracks_index = 0
        self.api_error = ""
        self.current_playback_context: Any = None
        self.devices: Any = None
        self.input: list[str] = []
        self.input_idx = 0
        self.input_cursor_position = 0
        self.liked_song_ids_set: set[str] = set()
        self.followed_artist_ids_set: set[str] = set()
        self.saved_album_ids_set: set[str] = set()
        self.saved_show_ids_set: set[str] = set()
        self.large_search_limit = 20
        self.small_search_limit = 4
        self.library = Library()
        self.playlist_offset = 0
        self.made_for_you_offset = 0
        self.playlist_tracks: Any = None
        self.made_for_you_tracks: Any = None
        self.playlists: Any = None
        self.recently_played: ResultAndSelectedIndex = ResultAndSelectedIndex()
        self.recommended_tracks: list = []
        self.recommendations_seed = ""
        self.recommendations_context: Any = None
        self.search_results = SearchResult()
        self.selected_album_simplified: Any = None
        self.selected_album_full: Any = None
        self.selected_device_index: int | None = None
        self.selected_playlist_index: int | None = None
        self.active_playlist_index: int | None = None
        self.song_progress_ms = 0
        self.seek_ms: int | None = None
        self.track_table = TrackTable()
        self.episode_table_context = EpisodeTableContext.FULL
        self.selected_show_simplified: Any = None
        self.selected_show_full: Any = None
        self.user: Any = None
        self.album_list_index = 0
        self.made_for_you_index = 0
        self.artists_list_index = 0
        self.shows_list_index = 0
        self.episode_list_index = 0
        self.help_docs_size = 0
        self.help_menu_page = 0
        self.help_menu_max_lines = 0
        self.help_menu_offset = 0
        self.is_loading = False
        self.is_fetching_current_playback = False
        self.dialog: str | None = None
        self.confirm = False

    # -- network requests -------------------------------------------------

    def dispatch(self, action: IoEvent) -> None:
        """Send ``action`` to the network worker and mark the app as loading."""
        self.is_loading = True
        if self._sender is None:
            return
        try:
            self._sender(action)
        except Exception as exc:
            self.is_loading = False
            print(f"Error from dispatch {exc}")

    def _playing_item(self) -> Any:
        return _get(self.current_playback_context, "item")

    def _apply_seek(self, seek_ms: int) -> None:
        item = self._playing_item()
        if item is None:
            return
        if seek_ms < _get(item, "duration_ms"):
            self.dispatch(IoEvent("Seek", seek_ms))
        else:
            self.dispatch(IoEvent("NextTrack"))

    def _elapsed_ms(self) -> int:
        return int((self._clock() - self.instant_since_last_current_playback_poll) * 1000)

    def _poll_current_playback(self) -> None:
        if self.is_fetching_current_playback or self._elapsed_ms() < POLL_INTERVAL_MS:
            return
        self.is_fetching_current_playback = True
        if self.seek_ms is not None:
            self._apply_seek(self.seek_ms)
        else:
            self.dispatch(IoEvent("GetCurrentPlayback"))

    def update_on_tick(self) -> None:
        """Poll playback when due and advance the displayed song progress."""
        self._poll_current_playback()
        context = self.current_playback_context
        item = self._playing_item()
        progress_ms = _get(context, "progress_ms")
        if item is None or progress_ms is None:
            return
        # Progress moves on while paused too, because seeking is possible then.
        elapsed = (self._elapsed_ms() if _get(context, "is_playing") else 0) + progress_ms
        self.song_progress_ms = min(elapsed, _get(item, "duration_ms"))

    def _current_progress(self) -> int:
        return self.seek_ms if self.seek_ms is not None else self.song_progress_ms

    def seek_forwards(self) -> None:
        item = self._playing_item()
        if item is None:
            return
        target = self._current_progress() + self.behavior.seek_milliseconds
        self.seek_ms = min(target, _get(item, "duration_ms"))

    def seek_backwards(self) -> None:
        self.seek_ms = max(self._current_progress() - self.behavior.seek_milliseconds, 0)

    def get_recommendations_for_seed(self, seed_artists, seed_tracks, first_track) -> None:
        self.dispatch(
            IoEvent(
                "GetRecommendationsForSeed",
                seed_artists,
                seed_tracks,
                first_track,
                self.get_user_country(),
            )
        )

    def get_recommendations_for_track_id(self, track_id: str) -> None:
        self.dispatch(
            IoEvent("GetRecommendationsForTrackId", track_id, self.get_user_country())
        )

    def _volume(self) -> int | None:
        context = self.current_playback_context
        if context is None:
            return None
        return int(_get(_get(context, "device"), "volume_percent"))

    def increase_volume(self) -> None:
        current = self._volume()
        if current is None:
            return
        target = min(current + self.behavior.volume_increment, MAX_VOLUME)
        if target != current:
            self.dispatch(IoEvent("ChangeVolume", target))

    def decrease_volume(self) -> None:
        current = self._volume()
        if current is None:
            return
        target = max(current - self.behavior.volume_increment, 0)
        if target != current:
            self.dispatch(IoEvent("ChangeVolume", target))

    def handle_error(self, error: Any) -> None:
        self.push_navigation_stack(RouteId.ERROR, ActiveBlock.ERROR)
        self.api_error = str(error)

    def toggle_playback(self) -> None:
        context = self.current_playback_context
        if context is not None and _get(context, "is_playing") is True:
            self.dispatch(IoEvent("PausePlayback"))
        else:
            # Without a context or uris the current playback resumes.
            self.dispatch(IoEvent("StartPlayback", None, None, None))

    def previous_track(self) -> None:
        if self.song_progress_ms >= RESTART_THRESHOLD_MS:
            self.dispatch(IoEvent("Seek", 0))
        else:
            self.dispatch(IoEvent("PreviousTrack"))

    # -- navigation -------------------------------------------------------

    def push_navigation_stack(self, next_route_id: RouteId, next_active_block: ActiveBlock) -> None:
        """Push a route unless it is the one already on top."""
        if self._navigation_stack and self._navigation_stack[-1].id == next_route_id:
            return
        self._navigation_stack.append(Route(next_route_id, next_active_block, next_active_block))

    def pop_navigation_stack(self) -> Route | None:
        """Pop the top route; the bottom route is never popped."""
        if len(self._navigation_stack) <= 1:
            return None
        return self._navigation_stack.pop()

    def current_route(self) -> Route:
        return self._navigation_stack[-1] if self._navigation_stack else DEFAULT_ROUTE

    def set_current_route_state(
        self,
        active_block: ActiveBlock | None = None,
        hovered_block: ActiveBlock | None = None,
    ) -> None:
        route = self._navigation_stack[-1]
        if active_block is not None:
            route.active_block = active_block
        if hovered_block is not None:
            route.hovered_block = hovered_block

    # -- clipboard --------------------------------------------------------

    def _copy(self, url_for: Callable[[Any], str]) -> None:
        if self.clipboard is None:
            return
        item = self._playing_item()
        if item is None:
            return
        try:
            self.clipboard(url_for(item))
        except Exception as exc:
            self.handle_error(f"failed to set clipboard content: {exc}")

    def copy_song_url(self) -> None:
        self._copy(share_track_url)

    def copy_album_url(self) -> None:
        self._copy(share_album_url)

    # -- library paging ---------------------------------------------------

    def set_saved_tracks_to_table(self, saved_track_page: Any) -> None:
        tracks = [_get(item, "track") for item in _get(saved_track_page, "items", ())]
        self.dispatch(IoEvent("SetTracksToTable", tracks))

    def set_saved_artists_to_table(self, saved_artists_page: Any) -> None:
        self.dispatch(IoEvent("SetArtistsToTable", list(_get(saved_artists_page, "items", ()))))

    @staticmethod
    def _next_offset(page: Any) -> int:
        return _get(page, "offset") + _get(page, "limit")

    def get_current_user_saved_artists_next(self) -> None:
        pages = self.library.saved_artists
        following = pages.get_results(pages.index + 1)
        if following is not None:
            self.set_saved_artists_to_table(following)
            pages.index += 1
            return
        current = pages.get_results()
        items = _get(current, "items") or []
        if items:
            self.dispatch(IoEvent("GetFollowedArtists", _get(items[-1], "id")))

    def get_current_user_saved_artists_previous(self) -> None:
        pages = self.library.saved_artists
        if pages.index > 0:
            pages.index -= 1
        current = pages.get_results()
        if current is not None:
            self.set_saved_artists_to_table(current)

    def get_current_user_saved_tracks_next(self) -> None:
        pages = self.library.saved_tracks
        following = pages.get_results(pages.index + 1)
        if following is not None:
            self.set_saved_tracks_to_table(following)
            pages.index += 1
            return
        current = pages.get_results()
        if current is not None:
            self.dispatch(IoEvent("GetCurrentSavedTracks", self._next_offset(current)))

    def get_current_user_saved_tracks_previous(self) -> None:
        pages = self.library.saved_tracks
        if pages.index > 0:
            pages.index -= 1
        current = pages.get_results()
        if current is not None:
            self.set_saved_tracks_to_table(current)

    def shuffle(self) -> None:
        context = self.current_playback_context
        if context is not None:
            self.dispatch(IoEvent("Shuffle", _get(context, "shuffle_state")))

    def _page_forward(self, pages, make_event: Callable[[int], IoEvent]) -> None:
        if pages.get_results(pages.index + 1) is not None:
            pages.index += 1
            return
        current = pages.get_results()
        if current is not None:
            self.dispatch(make_event(self._next_offset(current)))

    @staticmethod
    def _page_back(pages) -> None:
        if pages.index > 0:
            pages.index -= 1

    def get_current_user_saved_albums_next(self) -> None:
        self._page_forward(
            self.library.saved_albums,
            lambda offset: IoEvent("GetCurrentUserSavedAlbums", offset),
        )

    def get_current_user_saved_albums_previous(self) -> None:
        self._page_back(self.library.saved_albums)

    def get_current_user_saved_shows_next(self) -> None:
        self._page_forward(
            self.library.saved_shows,
            lambda offset: IoEvent("GetCurrentUserSavedShows", offset),
        )

    def get_current_user_saved_shows_previous(self) -> None:
        self._page_back(self.library.saved_shows)

    def get_episode_table_next(self, show_id: str) -> None:
        self._page_forward(
            self.library.show_episodes,
            lambda offset: IoEvent("GetCurrentShowEpisodes", show_id, offset),
        )

    def get_episode_table_previous(self) -> None:
        self._page_back(self.library.show_episodes)

    # -- saving and following ---------------------------------------------

    def _search_album_id(self) -> str | None:
        albums = self.search_results.albums
        index = self.search_results.selected_album_index
        if albums is None or index is None:
            return None
        return _get(_get(albums, "items")[index], "id")

    def _artist_album_id(self) -> str | None:
        if self.artist is None:
            return None
        album = _item_at(
            _get(_get(self.artist, "albums"), "items"),
            _get(self.artist, "selected_album_index"),
        )
        return _get(album, "id")

    def current_user_saved_album_delete(self, block: ActiveBlock) -> None:
        if block is ActiveBlock.SEARCH_RESULT_BLOCK:
            album_id = self._search_album_id()
        elif block is ActiveBlock.ALBUM_LIST:
            page = self.library.saved_albums.get_results()
            saved = _item_at(_get(page, "items"), self.album_list_index)
            album_id = _get(_get(saved, "album"), "id")
        elif block is ActiveBlock.ARTIST_BLOCK:
            album_id = self._artist_album_id()
        else:
            return
        if album_id is not None:
            self.dispatch(IoEvent("CurrentUserSavedAlbumDelete", album_id))

    def current_user_saved_album_add(self, block: ActiveBlock) -> None:
        if block is ActiveBlock.SEARCH_RESULT_BLOCK:
            album_id = self._search_album_id()
        elif block is ActiveBlock.ARTIST_BLOCK:
            album_id = self._artist_album_id()
        else:
            return
        if album_id is not None:
            self.dispatch(IoEvent("CurrentUserSavedAlbumAdd", album_id))

    def _search_artist_id(self) -> str | None:
        artists = self.search_results.artists
        index = self.search_results.selected_artists_index
        if artists is None or index is None:
            return None
        return _get(_get(artists, "items")[index], "id")

    def _related_artist_id(self) -> str | None:
        if self.artist is None:
            return None
        related = _get(self.artist, "related_artists")
        return _get(related[_get(self.artist, "selected_related_artist_index")], "id")

    def user_unfollow_artists(self, block: ActiveBlock) -> None:
        if block is ActiveBlock.SEARCH_RESULT_BLOCK:
            artist_id = self._search_artist_id()
        elif block is ActiveBlock.ALBUM_LIST:
            page = self.library.saved_artists.get_results()
            artist_id = _get(_item_at(_get(page, "items"), self.artists_list_index), "id")
        elif block is ActiveBlock.ARTIST_BLOCK:
            artist_id = self._related_artist_id()
        else:
            return
        if artist_id is not None:
            self.dispatch(IoEvent("UserUnfollowArtists", [artist_id]))

    def user_follow_artists(self, block: ActiveBlock) -> None:
        if block is ActiveBlock.SEARCH_RESULT_BLOCK:
            artist_id = self._search_artist_id()
        elif block is ActiveBlock.ARTIST_BLOCK:
            artist_id = self._related_artist_id()
        else:
            return
        if artist_id is not None:
            self.dispatch(IoEvent("UserFollowArtists", [artist_id]))

    def user_follow_playlist(self) -> None:
        playlists = self.search_results.playlists
        index = self.search_results.selected_playlists_index
        if playlists is None or index is None:
            return
        playlist = _get(playlists, "items")[index]
        self.dispatch(
            IoEvent(
                "UserFollowPlaylist",
                _get(_get(playlist, "owner"), "id"),
                _get(playlist, "id"),
                _get(playlist, "public"),
            )
        )

    def _unfollow_playlist(self, playlists: Any, index: int | None) -> None:
        if playlists is None or index is None or self.user is None:
            return
        playlist = _get(playlists, "items")[index]
        self.dispatch(
            IoEvent("UserUnfollowPlaylist", _get(self.user, "id"), _get(playlist, "id"))
        )

    def user_unfollow_playlist(self) -> None:
        self._unfollow_playlist(self.playlists, self.selected_playlist_index)

    def user_unfollow_playlist_search_result(self) -> None:
        self._unfollow_playlist(
            self.search_results.playlists, self.search_results.selected_playlists_index
        )

    def _episode_table_show_id(self) -> str | None:
        if self.episode_table_context is EpisodeTableContext.FULL:
            selected = self.selected_show_full
        else:
            selected = self.selected_show_simplified
        return _get(_get(selected, "show"), "id")

    def user_follow_show(self, block: ActiveBlock) -> None:
        if block is ActiveBlock.SEARCH_RESULT_BLOCK:
            shows = self.search_results.shows
            index = self.search_results.selected_shows_index
            if shows is None or index is None:
                return
            show_id = _get(_item_at(_get(shows, "items"), index), "id")
        elif block is ActiveBlock.EPISODE_TABLE:
            show_id = self._episode_table_show_id()
        else:
            return
        if show_id is not None:
            self.dispatch(IoEvent("CurrentUserSavedShowAdd", show_id))

    def user_unfollow_show(self, block: ActiveBlock) -> None:
        if block is ActiveBlock.PODCASTS:
            page = self.library.saved_shows.get_results()
            saved = _item_at(_get(page, "items"), self.shows_list_index)
            show_id = _get(_get(saved, "show"), "id")
        elif block is ActiveBlock.SEARCH_RESULT_BLOCK:
            shows = self.search_results.shows
            index = self.search_results.selected_shows_index
            if shows is None or index is None:
                return
            show_id = _get(_get(shows, "items")[index], "id")
        elif block is ActiveBlock.EPISODE_TABLE:
            show_id = self._episode_table_show_id()
        else:
            return
        if show_id is not None:
            self.dispatch(IoEvent("CurrentUserSavedShowDelete", show_id))

    # -- other requests ---------------------------------------------------

    def get_made_for_you(self) -> None:
        """Search for the made-for-you playlists once, while none are loaded."""
        if self.library.made_for_you_playlists.pages:
            return
        for name in MADE_FOR_YOU_PLAYLISTS:
            self.dispatch(IoEvent("MadeForYouSearchAndAdd", name, self.get_user_country()))

    def get_audio_analysis(self) -> None:
        item = self._playing_item()
        if item is None:
            return
        if _is_episode(item):
            # Episodes have no analysis; show the empty view instead.
            self.push_navigation_stack(RouteId.ANALYSIS, ActiveBlock.ANALYSIS)
        elif self.current_route().id != RouteId.ANALYSIS:
            self.dispatch(IoEvent("GetAudioAnalysis", _get(item, "uri")))
            self.push_navigation_stack(RouteId.ANALYSIS, ActiveBlock.ANALYSIS)

    def repeat(self) -> None:
        context = self.current_playback_context
        if context is not None:
            self.dispatch(IoEvent("Repeat", _get(context, "repeat_state")))

    def get_artist(self, artist_id: str, input_artist_name: str) -> None:
        self.dispatch(
            IoEvent("GetArtist", artist_id, input_artist_name, self.get_user_country())
        )

    def get_user_country(self) -> str | None:
        """The user's two-letter country code, or None if unknown or malformed."""
        country = _get(self.user, "country") or ""
        if len(country) == 2 and country.isascii() and country.isalpha() and country.isupper():
            return country
        return None

    def calculate_help_menu_offset(self) -> None:
        old_offset = self.help_menu_offset
        if self.help_menu_max_lines < self.help_docs_size:
            self.help_menu_offset = self.help_menu_page * self.help_menu_max_lines
        if self.help_menu_offset > self.help_docs_size:
            self.help_menu_offset = old_offset
            self.help_menu_page -= 1