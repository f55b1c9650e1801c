# spotterm

The core of a terminal client for a streaming music player. It holds the
parts that do not depend on a particular screen or network library.

## Modules

- `spotterm.key` — `Key`, a frozen value for a key press. `KeyCode` names
  the kind of key; `Key.from_f(n)` gives the function keys F0 to F12 (other
  numbers raise `ValueError`), and `Key.char`, `Key.ctrl` and `Key.alt` build
  character keys. `str(key)` renders a key as a help menu shows it, for
  example `<Ctrl+c>`, `<Space>`, `<Up Arrow Key>` or `<Enter>`.
- `spotterm.events` — `Events` runs a key reader in a background thread.
  The reader is any callable that waits up to a number of seconds for a key
  and returns a `Key` or `None`. Each poll queues an input `Event` when a key
  came, then a tick `Event` (`event.is_tick`). `Events.next(timeout)` blocks
  for the next event and raises `TimeoutError` when none arrives in time; an
  exception raised by the reader is raised again from `next`. `Events` is a
  context manager; `close()` stops the thread. `EventConfig` holds the exit
  key (Ctrl+c) and the tick rate (0.25 s); `Events.with_tick_rate(reader, ms)`
  sets the rate in milliseconds.
- `spotterm.config` — `ClientConfig` holds the client id, client secret,
  device id and redirect port kept in `~/.config/spotify-tui/client.yml`.
  `get_or_build_paths`, `set_device_id` and `load_config` take an optional
  home directory; `load_config` also takes the functions used to read input
  and write output, so first-time setup can be driven without a terminal.
  `to_yaml` and `from_yaml` convert to and from the file's YAML. Problems are
  raised as `ConfigError`.
- `spotterm.formatting` — the `--format` template engine. `Format` pairs a
  `FormatKind` with a value; `formats_for_album`, `formats_for_artist`,
  `formats_for_playlist`, `formats_for_track`, `formats_for_show` and
  `formats_for_episode` build them from mappings or objects, and
  `format_output(template, values, icons)` fills the template using the
  `Icons` given. The enums `ItemType`, `Flag` and `JumpDirection` pick the
  selected option out of parsed arguments.
- `spotterm.cli_parser` — `build_parser()` and `parse_args(argv)` for the
  `playback` (`pb`), `play` (`p`), `list` (`l`) and `search` (`s`)
  sub-commands. `parse_args` enforces which options go together, fills in
  the default `--format` for the options given and raises `UsageError` on a
  bad command line.
- `spotterm.commands` — the checks and lookups behind those commands:
  `parse_limit`, `parse_volume`, `seek_target`, `share_track_url`,
  `share_album_url`, `find_device_id` and `device_index_by_name`. Failures
  raise `CommandError`.
- `spotterm.state` — the state types: routes (`Route`, `RouteId`,
  `ActiveBlock`), result paging (`ScrollableResultPages`), `Library`,
  `SearchResult`, `TrackTable`, `IoEvent` (a network request by name and
  arguments) and `Behavior` (seek step, volume step and icons).
- `spotterm.app` — `App`, the application state with its navigation stack.
  Its methods turn user actions (seeking, volume, paging through the
  library, following and saving, copying share links) into `IoEvent`s passed
  to the `sender` callable it was given.

## Examples

```python
from spotterm.config import ClientConfig, ConfigError, validate_client_key

config = ClientConfig()
config.port_or_default()   # 8888 unless a port is configured
config.redirect_uri()      # "http://localhost:8888/callback"

try:
    validate_client_key("placeholder")
except ConfigError as exc:
    print(exc)             # invalid length: 11 (must be 32)
```

A client id or secret must be exactly 32 hexadecimal digits. During
first-time setup `load_config` asks at most five times for each.

```python
from spotterm.commands import parse_limit, parse_volume, seek_target

parse_volume("40")                  # 40; above 100 raises CommandError
parse_limit("20")                   # 20; must lie between 1 and 50
seek_target("+10", 5_000, 200_000)  # 15000
seek_target("-10", 5_000, 200_000)  # 0, never before the start
seek_target("10", 5_000, 8_000)     # None: past the end, skip to the next track
```

```python
from spotterm.cli_parser import parse_args

ns = parse_args(["pb", "--volume", "40"])
ns.command   # "playback"
ns.format    # "%v% %f %s %t - %a"
```

## What it does not do

The package has no network client, no terminal screen and no command to
run. `parse_args` parses a command line but nothing in the package carries
it out, and `App` only hands `IoEvent`s to the sender it is given; talking
to the music service and drawing the interface are left to the code that
uses the package.

## Tests

The test suite uses pytest and is installed with the `test` extra.