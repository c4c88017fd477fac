from pathlib import Path

import pytest

from plikd_config.errors import ConfigValidationError, DecodeError, SourceUnavailableError
from plikd_config.loader import DEFAULT_CONFIG_PATH, load_configuration, read_toml_source


def test_load_default_source():
    c = load_configuration(DEFAULT_CONFIG_PATH)
    assert c.listen_address == "0.0.0.0"
    assert c.listen_port == 8080
    assert c.max_file_size == 10_000_000_000
    assert c.default_ttl == 30 * 86400
    assert c.metadata_backend == "bolt"
    assert c.metadata_backend_config == {"Path": "plik.db"}
    assert c.get_server_url().geturl() == "http://127.0.0.1:8080"


def test_load_config_not_found(tmp_path: Path):
    with pytest.raises(SourceUnavailableError):
        load_configuration(tmp_path / "invalid_config_path")


def test_load_directory_is_unavailable(tmp_path: Path):
    with pytest.raises(SourceUnavailableError):
        load_configuration(tmp_path)


def test_absent_keys_keep_defaults(write_config):
    path = write_config('ListenPort = 9090\nUploadWhitelist = ["10.0.0.0/8"]\n')
    c = load_configuration(path)
    assert c.listen_port == 9090
    assert c.listen_address == "127.0.0.1"
    assert c.ssl_enabled is False
    assert c.is_whitelisted("10.1.2.3")
    assert not c.is_whitelisted("192.168.0.1")


def test_nested_backend_config(write_config):
    path = write_config(
        'MetadataBackend = "sqlite3"\n'
        "[MetadataBackendConfig]\n"
        'ConnectionString = "plik.db"\n'
        "Debug = true\n"
        "Pool = [1, 2]\n"
    )
    c = load_configuration(path)
    assert c.metadata_backend == "sqlite3"
    assert c.metadata_backend_config == {
        "ConnectionString": "plik.db",
        "Debug": True,
        "Pool": [1, 2],
    }


def test_malformed_source(write_config):
    path = write_config("ListenPort = \n")
    with pytest.raises(DecodeError):
        load_configuration(path)


def test_wrong_value_type(write_config):
    path = write_config('ListenPort = "eighty"\n')
    with pytest.raises(DecodeError):
        load_configuration(path)


def test_unknown_keys_are_ignored(write_config):
    path = write_config('SomethingElse = "x"\nListenPort = 1234\n')
    c = load_configuration(path)
    assert c.listen_port == 1234


def test_validation_failure_is_propagated(write_config):
    path = write_config("DefaultTTL = 864000\nMaxTTL = 86400\n")
    with pytest.raises(ConfigValidationError):
        load_configuration(path)


def test_injected_reader():
    seen = []

    def reader(path: Path):
        seen.append(path)
        return {"ListenAddress": "1.1.1.1", "SslEnabled": True}

    c = load_configuration("memory://plikd", reader=reader)
    assert seen == [Path("memory://plikd")]
    assert c.get_server_url().geturl() == "https://1.1.1.1:8080"


def test_read_toml_source(write_config):
    path = write_config('Path = "/plik"\n')
    assert read_toml_source(path) == {"Path": "/plik"}


def test_non_utf8_source_is_a_decode_error(tmp_path: Path):
    path = tmp_path / "plikd.cfg"
    path.write_bytes(b'ListenAddress = "\xff\xfe"\n')
    with pytest.raises(DecodeError):
        load_configuration(path)
