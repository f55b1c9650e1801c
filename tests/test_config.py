import pytest

from spotterm.config import (
    BANNER,
    DEFAULT_PORT,
    ClientConfig,
    ConfigError,
    validate_client_key,
)

VALID_HEX = "0123456789abcdef" * 2
OTHER_HEX = "FEDCBA9876543210" * 2


def _feeder(lines):
    pending = list(lines)

    def read():
        if not pending:
            raise EOFError
        return pending.pop(0)

    return read


def test_validate_rejects_wrong_length():
    with pytest.raises(ConfigError, match=r"invalid length: 3 \(must be 32\)"):
        validate_client_key("abc")


def test_validate_rejects_non_hex():
    with pytest.raises(ConfigError, match="invalid character found"):
        validate_client_key("g" * 32)


def test_validate_counts_bytes():
    with pytest.raises(ConfigError, match="invalid length"):
        validate_client_key("é" * 32)


def test_redirect_uri_uses_default_port():
    config = ClientConfig()
    assert config.port_or_default() == DEFAULT_PORT
    assert config.redirect_uri() == "http://localhost:8888/callback"


def test_redirect_uri_uses_configured_port():
    assert ClientConfig(port=9000).redirect_uri() == "http://localhost:9000/callback"


def test_yaml_round_trip():
    config = ClientConfig(client_id="0123", client_secret="secret", device_id="dev", port=1234)
    assert ClientConfig.from_yaml(config.to_yaml()) == config


def test_yaml_round_trip_with_nones():
    config = ClientConfig(client_id=VALID_HEX, client_secret="secret")
    assert ClientConfig.from_yaml(config.to_yaml()) == config


@pytest.mark.parametrize(
    "text",
    [
        "client_secret: x\n",
        "client_id: x\n",
        "- a\n- b\n",
        "client_id: x\nclient_secret: y\nport: 70000\n",
        "client_id: x\nclient_secret: y\nport: nope\n",
        "client_id: [unclosed\n",
    ],
)
def test_from_yaml_rejects_bad_documents(text):
    with pytest.raises(ConfigError):
        ClientConfig.from_yaml(text)


def test_paths_are_built_under_home(tmp_path):
    paths = ClientConfig().get_or_build_paths(tmp_path)
    app_dir = tmp_path / ".config" / "spotify-tui"
    assert paths.config_file_path == app_dir / "client.yml"
    assert paths.token_cache_path == app_dir / ".spotify_token_cache.json"
    assert app_dir.is_dir()


def test_load_existing_config(tmp_path):
    stored = ClientConfig(client_id="id", client_secret="secret", device_id="d1", port=4000)
    paths = ClientConfig().get_or_build_paths(tmp_path)
    paths.config_file_path.write_text(stored.to_yaml(), encoding="utf-8")

    config = ClientConfig()
    config.load_config(home=tmp_path, input_fn=_feeder([]), output_fn=lambda s: None)
    assert config == stored


def test_interactive_setup_writes_file(tmp_path):
    output = []
    config = ClientConfig()
    config.load_config(
        home=tmp_path,
        input_fn=_feeder(["short", VALID_HEX, f"  {OTHER_HEX}  ", "9001"]),
        output_fn=output.append,
    )
    assert config.client_id == VALID_HEX
    assert config.client_secret == OTHER_HEX
    assert config.port == 9001
    assert config.device_id is None
    assert BANNER in output
    assert any("invalid length" in line for line in output)
    written = config.get_or_build_paths(tmp_path).config_file_path.read_text(encoding="utf-8")
    assert ClientConfig.from_yaml(written) == config


def test_interactive_setup_defaults_port(tmp_path):
    config = ClientConfig()
    config.load_config(
        home=tmp_path,
        input_fn=_feeder([VALID_HEX, OTHER_HEX, "not a port"]),
        output_fn=lambda s: None,
    )
    assert config.port == DEFAULT_PORT


def test_interactive_setup_gives_up_after_retries(tmp_path):
    with pytest.raises(ConfigError, match=r"Maximum retries \(5\) exceeded\."):
        ClientConfig().load_config(
            home=tmp_path, input_fn=_feeder(["bad"] * 5), output_fn=lambda s: None
        )
    assert not ClientConfig().get_or_build_paths(tmp_path).config_file_path.exists()


def test_interactive_setup_end_of_input(tmp_path):
    with pytest.raises(ConfigError, match="Maximum retries"):
        ClientConfig().load_config(home=tmp_path, input_fn=_feeder([]), output_fn=lambda s: None)


def test_set_device_id_updates_file(tmp_path):
    stored = ClientConfig(client_id="id", client_secret="secret", port=8000)
    config = ClientConfig()
    path = config.get_or_build_paths(tmp_path).config_file_path
    path.write_text(stored.to_yaml(), encoding="utf-8")

    config.set_device_id("device-1", home=tmp_path)
    assert config.device_id == "device-1"
    reread = ClientConfig.from_yaml(path.read_text(encoding="utf-8"))
    assert reread.device_id == "device-1"
    assert reread.port == 8000


def test_set_device_id_without_file(tmp_path):
    config = ClientConfig()
    with pytest.raises(FileNotFoundError):
        config.set_device_id("device-1", home=tmp_path)
    assert config.device_id is None