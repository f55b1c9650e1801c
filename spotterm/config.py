"""Client credentials stored in a YAML file under the user's config directory."""

from __future__ import annotations

import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

import yaml

DEFAULT_PORT = 8888
FILE_NAME = "client.yml"
CONFIG_DIR = ".config"
APP_CONFIG_DIR = "spotify-tui"
TOKEN_CACHE_FILE = ".spotify_token_cache.json"
MAX_RETRIES = 5
EXPECTED_KEY_LEN = 32

BANNER = r"""
   _________  ____  / /_(_) __/_  __      / /___  __(_)
  / ___/ __ \/ __ \/ __/ / /_/ / / /_____/ __/ / / / / 
 (__  ) /_/ / /_/ / /_/ / __/ /_/ /_____/ /_/ /_/ / /  
/____/ .___/\____/\__/_/_/  \__, /      \__/\__,_/_/   
    /_/                    /____/                      
"""

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")
_KEY_LABELS = ("Client ID", "Client Secret")


class ConfigError(Exception):
    """The client configuration could not be read, validated or written."""


@dataclass(frozen=True)
class ConfigPaths:
    config_file_path: Path
    token_cache_path: Path


def validate_client_key(key: str) -> None:
    """Raise ConfigError unless ``key`` is 32 hexadecimal digits."""
    length = len(key.encode("utf-8"))
    if length != EXPECTED_KEY_LEN:
        raise ConfigError(f"invalid length: {length} (must be {EXPECTED_KEY_LEN})")
    if not all(c in _HEX_DIGITS for c in key):
        raise ConfigError("invalid character found (must be hex digits)")


def _read_line(input_fn: Callable[[], str]) -> str:
    try:
        return input_fn()
    except EOFError:
        return ""


def _parse_port(text: str) -> int:
    text = text.strip()
    if re.fullmatch(r"\+?[0-9]+", text) and int(text) <= 0xFFFF:
        return int(text)
    return DEFAULT_PORT


@dataclass
class ClientConfig:
    client_id: str = ""
    client_secret: str = ""
    device_id: str | None = None
    port: int | None = None

    def port_or_default(self) -> int:
        return self.port if self.port is not None else DEFAULT_PORT

    def redirect_uri(self) -> str:
        return f"http://localhost:{self.port_or_default()}/callback"

    def get_or_build_paths(self, home: Path | str | None = None) -> ConfigPaths:
        """Return the config paths, creating the directories they live in."""
        if home is None:
            try:
                home = Path.home()
            except (RuntimeError, KeyError) as exc:
                raise ConfigError("No $HOME directory found for client config") from exc
        home_config_dir = Path(home) / CONFIG_DIR
        app_config_dir = home_config_dir / APP_CONFIG_DIR
        home_config_dir.mkdir(exist_ok=True)
        app_config_dir.mkdir(exist_ok=True)
        return ConfigPaths(
            config_file_path=app_config_dir / FILE_NAME,
            token_cache_path=app_config_dir / TOKEN_CACHE_FILE,
        )

    def set_device_id(self, device_id: str, home: Path | str | None = None) -> None:
        """Remember ``device_id`` here and in the config file."""
        paths = self.get_or_build_paths(home)
        stored = ClientConfig.from_yaml(paths.config_file_path.read_text(encoding="utf-8"))
        self.device_id = device_id
        stored.device_id = device_id
        paths.config_file_path.write_text(stored.to_yaml(), encoding="utf-8")

    def load_config(
        self,
        home: Path | str | None = None,
        input_fn: Callable[[], str] = input,
        output_fn: Callable[[str], None] = print,
    ) -> None:
        """Load the config file, asking for credentials and writing it if it is missing."""
        paths = self.get_or_build_paths(home)
        if paths.config_file_path.exists():
            loaded = ClientConfig.from_yaml(paths.config_file_path.read_text(encoding="utf-8"))
        else:
            loaded = self._ask_for_config(paths, input_fn, output_fn)
            paths.config_file_path.write_text(loaded.to_yaml(), encoding="utf-8")
        self.client_id = loaded.client_id
        self.client_secret = loaded.client_secret
        self.device_id = loaded.device_id
        self.port = loaded.port

    @staticmethod
    def _ask_for_config(paths, input_fn, output_fn) -> ClientConfig:
        output_fn(BANNER)
        output_fn(f"Config will be saved to {paths.config_file_path}")
        output_fn("\nHow to get setup:\n")
        instructions = [
            "Go to the Spotify developer dashboard",
            "Click `Create a Client ID` and create an app",
            "Now click `Edit Settings`",
            f"Add `http://localhost:{DEFAULT_PORT}/callback` to the Redirect URIs",
            "You are now ready to authenticate with Spotify!",
        ]
        for number, item in enumerate(instructions, start=1):
            output_fn(f"  {number}. {item}")

        client_id, client_secret = (
            ClientConfig._ask_for_key(label, input_fn, output_fn) for label in _KEY_LABELS
        )

        output_fn(f"\nEnter port of redirect uri (default {DEFAULT_PORT}): ")
        port = _parse_port(_read_line(input_fn))
        return ClientConfig(client_id=client_id, client_secret=client_secret, port=port)

    @staticmethod
    def _ask_for_key(label, input_fn, output_fn) -> str:
        for _ in range(MAX_RETRIES):
            output_fn(f"\nEnter your {label}: ")
            key = _read_line(input_fn).strip()
            try:
                validate_client_key(key)
            except ConfigError as exc:
                output_fn(str(exc))
            else:
                return key
        raise ConfigError(f"Maximum retries ({MAX_RETRIES}) exceeded.")

    def to_yaml(self) -> str:
        return yaml.safe_dump(
            {
                "client_id": self.client_id,
                "client_secret": self.client_secret,
                "device_id": self.device_id,
                "port": self.port,
            },
            sort_keys=False,
            allow_unicode=True,
        )

    @classmethod
    def from_yaml(cls, text: str) -> ClientConfig:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigError(f"invalid config file: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigError("config file must hold a mapping")
        values = {}
        for name in ("client_id", "client_secret"):
            if name not in data:
                raise ConfigError(f"missing field `{name}`")
            if not isinstance(data[name], str):
                raise ConfigError(f"field `{name}` must be a string")
            values[name] = data[name]
        device_id = data.get("device_id")
        if device_id is not None and not isinstance(device_id, str):
            raise ConfigError("field `device_id` must be a string")
        port = data.get("port")
        if port is not None and (
            isinstance(port, bool) or not isinstance(port, int) or not 0 <= port <= 0xFFFF
        ):
            raise ConfigError("field `port` must be a port number")
        return cls(device_id=device_id, port=port, **values)