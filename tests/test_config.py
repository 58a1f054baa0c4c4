from pathlib import Path

from updatecheck.config import (
    URL_ENV,
    ensure_config_dir,
    get_config_dir,
    get_config_path,
    is_disabled,
    load_config,
)


def test_config_dir_follows_xdg(config_home):
    assert get_config_dir() == config_home / "updatecheck"
    assert get_config_path() == config_home / "updatecheck" / "config.toml"


def test_config_dir_defaults_to_home(monkeypatch, tmp_path):
    monkeypatch.delenv("XDG_CONFIG_HOME")
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path))
    assert get_config_dir() == tmp_path / ".config" / "updatecheck"


def test_ensure_config_dir_creates_it(config_home):
    assert not config_home.exists()
    assert ensure_config_dir().is_dir()


def test_kill_switch_needs_literal_true(monkeypatch):
    assert not is_disabled()
    monkeypatch.setenv("UPDATECHECK_DISABLE_UPDATE_CHECK", "1")
    assert not is_disabled()
    monkeypatch.setenv("UPDATECHECK_DISABLE_UPDATE_CHECK", "true")
    assert is_disabled()


def test_load_config_defaults():
    config = load_config()
    assert config["updatecheck"]["url"] is None
    assert config["updatecheck"]["timeout"] == 5.0


def test_load_config_reads_toml():
    ensure_config_dir()
    get_config_path().write_text('[updatecheck]\nurl = "http://localhost:9000/check"\ntimeout = 1.5\n')

    config = load_config()
    assert config["updatecheck"]["url"] == "http://localhost:9000/check"
    assert config["updatecheck"]["timeout"] == 1.5


def test_env_url_overrides_toml(monkeypatch):
    ensure_config_dir()
    get_config_path().write_text('[updatecheck]\nurl = "http://from-file/check"\n')
    monkeypatch.setenv(URL_ENV, "http://from-env/check")

    assert load_config()["updatecheck"]["url"] == "http://from-env/check"


def test_broken_toml_falls_back_to_defaults():
    ensure_config_dir()
    get_config_path().write_text("[updatecheck\nurl = ")

    config = load_config()
    assert config["updatecheck"]["url"] is None
    assert config["updatecheck"]["timeout"] == 5.0
