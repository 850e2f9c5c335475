import logging

import pytest

from rawed.config import DEFAULT_KEY_BINDINGS, ConfigError, EditorConfig, load_config
from rawed.keys import ESC, Key, ctrl
from rawed.logs import setup_logging


def write(tmp_path, text):
    path = tmp_path / "config.toml"
    path.write_text(text)
    return str(path)


def test_missing_default_file_gives_defaults(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    config = load_config()
    assert config == EditorConfig()
    assert config.key_bindings == DEFAULT_KEY_BINDINGS


def test_missing_explicit_file_is_an_error(tmp_path):
    with pytest.raises(ConfigError):
        load_config(str(tmp_path / "absent.toml"))


def test_full_config(tmp_path):
    path = write(tmp_path, """
[editor]
tab_stop = 4
quit_times = 2
message_timeout = 1.5

[keys]
quit = ["ctrl-d", "esc"]
save = "ctrl-w"

[logging]
file = "/tmp/rawed.log"
level = "debug"
""")
    config = load_config(path)
    assert config.tab_stop == 4
    assert config.quit_times == 2
    assert config.message_timeout == 1.5
    assert config.key_bindings["quit"] == (ctrl("d"), ESC)
    assert config.key_bindings["save"] == (ctrl("w"),)
    assert config.key_bindings["refresh"] == DEFAULT_KEY_BINDINGS["refresh"]
    assert config.log_file == "/tmp/rawed.log"
    assert config.log_level == "DEBUG"


def test_named_keys_in_bindings(tmp_path):
    config = load_config(write(tmp_path, '[keys]\nrefresh = ["home"]\n'))
    assert config.key_bindings["refresh"] == (Key.HOME,)


@pytest.mark.parametrize("text", [
    "[editor]\ntab_stop = 0\n",
    "[editor]\nquit_times = \"three\"\n",
    "[editor]\nmessage_timeout = -1\n",
    "[keys]\nundo = \"ctrl-z\"\n",
    "[keys]\nquit = \"hyper-q\"\n",
    "[logging]\nlevel = \"loud\"\n",
    "editor = 5\n",
    "keys = \"ctrl-q\"\n",
    "logging = [1, 2]\n",
    "[keys]\nquit = 17\n",
    "[keys]\nquit = []\n",
    "[keys]\nsave = [\"ctrl-s\", 3]\n",
    "[logging]\nfile = 42\n",
    "this is not toml",
])
def test_invalid_config(tmp_path, text):
    with pytest.raises(ConfigError):
        load_config(write(tmp_path, text))


def test_setup_logging_to_file(tmp_path):
    log_file = tmp_path / "rawed.log"
    setup_logging(str(log_file), "INFO")
    try:
        logging.getLogger("rawed.test").info("hello log")
        for handler in logging.getLogger().handlers:
            handler.flush()
        assert "hello log" in log_file.read_text()
    finally:
        setup_logging(None)


def test_setup_logging_without_file_uses_null_handler():
    setup_logging(None)
    handlers = logging.getLogger().handlers
    assert len(handlers) == 1
    assert isinstance(handlers[0], logging.NullHandler)
