"""Navigation, library and search state shared by the terminal front end."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

from .formatting import Icons

T = TypeVar("T")

LIBRARY_OPTIONS = (
    "Made For You",
    "Recently Played",
    "Liked Songs",
    "Albums",
    "Artists",
    "Podcasts",
)


@dataclass
class ScrollableResultPages(Generic[T]):
    """Pages of results fetched so far, with the one currently shown."""

    index: int = 0
    pages: list[T] = field(default_factory=list)

    def get_results(self, at_index: int | None = None) -> T | None:
        """Return the page at ``at_index`` (the current one by default), or None."""
        position = self.index if at_index is None else at_index
        if 0 <= position < len(self.pages):
            return self.pages[position]
        return None

    def add_pages(self, new_pages: T) -> None:
        """Append a page and make it the current one."""
        self.pages.append(new_pages)
        self.index = len(self.pages) - 1


@dataclass
class ResultAndSelectedIndex(Generic[T]):
    index: int = 0
    result: T | None = None


@dataclass
class Library:
    selected_index: int = 0
    saved_tracks: ScrollableResultPages = field(default_factory=ScrollableResultPages)
    made_for_you_playlists: ScrollableResultPages = field(default_factory=ScrollableResultPages)
    saved_albums: ScrollableResultPages = field(default_factory=ScrollableResultPages)
    saved_shows: ScrollableResultPages = field(default_factory=ScrollableResultPages)
    saved_artists: ScrollableResultPages = field(default_factory=ScrollableResultPages)
    show_episodes: ScrollableResultPages = field(default_factory=ScrollableResultPages)


class SearchResultBlock(Enum):
    ALBUM_SEARCH = "AlbumSearch"
    SONG_SEARCH = "SongSearch"
    ARTIST_SEARCH = "ArtistSearch"
    PLAYLIST_SEARCH = "PlaylistSearch"
    SHOW_SEARCH = "ShowSearch"
    EMPTY = "Empty"


class ArtistBlock(Enum):
    TOP_TRACKS = "TopTracks"
    ALBUMS = "Albums"
    RELATED_ARTISTS = "RelatedArtists"
    EMPTY = "Empty"


class DialogContext(Enum):
    PLAYLIST_WINDOW = "PlaylistWindow"
    PLAYLIST_SEARCH = "PlaylistSearch"


class ActiveBlock(Enum):
    """The block that has focus; dialogs carry the context they were opened from."""

    ANALYSIS = "Analysis"
    PLAY_BAR = "PlayBar"
    ALBUM_TRACKS = "AlbumTracks"
    ALBUM_LIST = "AlbumList"
    ARTIST_BLOCK = "ArtistBlock"
    EMPTY = "Empty"
    ERROR = "Error"
    HELP_MENU = "HelpMenu"
    HOME = "Home"
    INPUT = "Input"
    LIBRARY = "Library"
    MY_PLAYLISTS = "MyPlaylists"
    PODCASTS = "Podcasts"
    EPISODE_TABLE = "EpisodeTable"
    RECENTLY_PLAYED = "RecentlyPlayed"
    SEARCH_RESULT_BLOCK = "SearchResultBlock"
    SELECT_DEVICE = "SelectDevice"
    TRACK_TABLE = "TrackTable"
    MADE_FOR_YOU = "MadeForYou"
    ARTISTS = "Artists"
    BASIC_VIEW = "BasicView"
    DIALOG_PLAYLIST_WINDOW = "Dialog(PlaylistWindow)"
    DIALOG_PLAYLIST_SEARCH = "Dialog(PlaylistSearch)"

    @classmethod
    def dialog(cls, context: DialogContext) -> ActiveBlock:
        return _DIALOG_BLOCKS[context]

    @property
    def dialog_context(self) -> DialogContext | None:
        """The dialog's context, or None when this block is not a dialog."""
        return _DIALOG_CONTEXTS.get(self)


_DIALOG_BLOCKS = {
    DialogContext.PLAYLIST_WINDOW: ActiveBlock.DIALOG_PLAYLIST_WINDOW,
    DialogContext.PLAYLIST_SEARCH: ActiveBlock.DIALOG_PLAYLIST_SEARCH,
}
_DIALOG_CONTEXTS = {block: context for context, block in _DIALOG_BLOCKS.items()}


class RouteId(Enum):
    ANALYSIS = "Analysis"
    ALBUM_TRACKS = "AlbumTracks"
    ALBUM_LIST = "AlbumList"
    ARTIST = "Artist"
    BASIC_VIEW = "BasicView"
    ERROR = "Error"
    HOME = "Home"
    RECENTLY_PLAYED = "RecentlyPlayed"
    SEARCH = "Search"
    SELECTED_DEVICE = "SelectedDevice"
    TRACK_TABLE = "TrackTable"
    MADE_FOR_YOU = "MadeForYou"
    ARTISTS = "Artists"
    PODCASTS = "Podcasts"
    PODCAST_EPISODES = "PodcastEpisodes"
    RECOMMENDATIONS = "Recommendations"


@dataclass
class Route:
    id: RouteId = RouteId.HOME
    active_block: ActiveBlock = ActiveBlock.EMPTY
    hovered_block: ActiveBlock = ActiveBlock.LIBRARY


DEFAULT_ROUTE = Route()


class TrackTableContext(Enum):
    MY_PLAYLISTS = "MyPlaylists"
    ALBUM_SEARCH = "AlbumSearch"
    PLAYLIST_SEARCH = "PlaylistSearch"
    SAVED_TRACKS = "SavedTracks"
    RECOMMENDED_TRACKS = "RecommendedTracks"
    MADE_FOR_YOU = "MadeForYou"


class AlbumTableContext(Enum):
    SIMPLIFIED = "Simplified"
    FULL = "Full"


class EpisodeTableContext(Enum):
    SIMPLIFIED = "Simplified"
    FULL = "Full"


class RecommendationsContext(Enum):
    ARTIST = "Artist"
    SONG = "Song"


@dataclass
class SearchResult:
    albums: Any = None
    artists: Any = None
    playlists: Any = None
    tracks: Any = None
    shows: Any = None
    selected_album_index: int | None = None
    selected_artists_index: int | None = None
    selected_playlists_index: int | None = None
    selected_tracks_index: int | None = None
    selected_shows_index: int | None = None
    hovered_block: SearchResultBlock = SearchResultBlock.SONG_SEARCH
    selected_block: SearchResultBlock = SearchResultBlock.EMPTY


@dataclass
class TrackTable:
    tracks: list = field(default_factory=list)
    selected_index: int = 0
    context: TrackTableContext | None = None


@dataclass
class SelectedShow:
    show: Any


@dataclass
class SelectedFullShow:
    show: Any


@dataclass
class SelectedAlbum:
    album: Any
    tracks: Any
    selected_index: int = 0


@dataclass
class SelectedFullAlbum:
    album: Any
    selected_index: int = 0


@dataclass
class Artist:
    artist_name: str
    albums: Any
    related_artists: list
    top_tracks: list
    artist_hovered_block: ArtistBlock
    artist_selected_block: ArtistBlock
    selected_album_index: int = 0
    selected_related_artist_index: int = 0
    selected_top_track_index: int = 0


_EVENT_ARITY = {
    "GetCurrentPlayback": 0,
    "GetDevices": 0,
    "GetPlaylists": 0,
    "NextTrack": 0,
    "PreviousTrack": 0,
    "PausePlayback": 0,
    "Seek": 1,
    "ChangeVolume": 1,
    "Shuffle": 1,
    "Repeat": 1,
    "StartPlayback": 3,
    "GetRecommendationsForSeed": 4,
    "GetRecommendationsForTrackId": 2,
    "SetTracksToTable": 1,
    "SetArtistsToTable": 1,
    "GetFollowedArtists": 1,
    "GetCurrentSavedTracks": 1,
    "GetCurrentUserSavedAlbums": 1,
    "CurrentUserSavedAlbumDelete": 1,
    "CurrentUserSavedAlbumAdd": 1,
    "GetCurrentUserSavedShows": 1,
    "GetCurrentShowEpisodes": 2,
    "UserUnfollowArtists": 1,
    "UserFollowArtists": 1,
    "UserFollowPlaylist": 3,
    "UserUnfollowPlaylist": 2,
    "CurrentUserSavedShowAdd": 1,
    "CurrentUserSavedShowDelete": 1,
    "MadeForYouSearchAndAdd": 2,
    "GetAudioAnalysis": 1,
    "GetArtist": 3,
    "CurrentUserSavedTracksContains": 1,
    "UpdateSearchLimits": 2,
    "TransferPlaybackToDevice": 1,
    "ToggleSaveTrack": 1,
    "AddItemToQueue": 1,
    "GetSearchResults": 2,
}


@dataclass(frozen=True, init=False)
class IoEvent:
    """A request for the network worker: an event name and its arguments."""

    name: str
    args: tuple

    def __init__(self, name: str, *args: Any) -> None:
        if name not in _EVENT_ARITY:
            raise ValueError(f"unknown event: {name}")
        expected = _EVENT_ARITY[name]
        if len(args) != expected:
            raise ValueError(f"{name} takes {expected} argument(s), got {len(args)}")
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "args", args)


@dataclass(frozen=True)
class Behavior:
    """User settings that shape seeking, volume steps and status icons."""

    seek_milliseconds: int
    volume_increment: int
    icons: Icons | None = None

    def __post_init__(self) -> None:
        if self.seek_milliseconds < 0:
            raise ValueError("seek_milliseconds must not be negative")
        if not 0 <= self.volume_increment <= 100:
            raise ValueError("volume_increment must be between 0 and 100")