"""Terminal music-player client core: keys, events, configuration, formatting, parsing and state."""

__version__ = "0.1.0"