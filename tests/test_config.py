"""Tests for the configuration container."""

import pytest

from formcraft.core.config import DEFAULTS, Config, config, get_config, reset_config


def test_defaults():
    cfg = get_config()
    assert cfg.get("forms.locale") == "en"
    assert cfg.get("forms.name_prefix") == "n_"
    assert cfg.get("forms.id_prefix") == "i_"
    assert cfg.get("logging.level") == "INFO"
    assert config("forms.missing", "fallback") == "fallback"


def test_runtime_set_overrides_and_clears_cache():
    cfg = Config(DEFAULTS)
    assert cfg.get("forms") == DEFAULTS["forms"]
    cfg.set("forms.locale", "zh_CN")
    assert cfg.get("forms.locale") == "zh_CN"
    assert cfg.get("forms")["locale"] == "zh_CN"
    # Defaults are not mutated by merging
    assert DEFAULTS["forms"]["locale"] == "en"


def test_source_priority():
    cfg = Config()
    cfg.add_source("low", {"a": {"b": 1, "c": 1}}, priority=1)
    cfg.add_source("high", {"a": {"b": 2}}, priority=5)
    assert cfg.get("a.b") == 2
    assert cfg.get("a.c") == 1


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("FORMCRAFT_FORMS__LOCALE", "zh_CN")
    monkeypatch.setenv("FORMCRAFT_FORMS__STRICT", "true")
    monkeypatch.setenv("FORMCRAFT_LOGGING__DEPTH", "3")
    reset_config()
    cfg = get_config()
    assert cfg.get("forms.locale") == "zh_CN"
    assert cfg.get_bool("forms.strict") is True
    assert cfg.get_int("logging.depth") == 3
    assert cfg.get("forms.name_prefix") == "n_"


def test_load_from_file(tmp_path):
    path = tmp_path / "forms_config.py"
    path.write_text('config = {"forms": {"id_prefix": "field-"}}\n')
    cfg = Config(DEFAULTS)
    cfg.load_from_file(path)
    assert cfg.get("forms.id_prefix") == "field-"
    assert cfg.get("forms.name_prefix") == "n_"


def test_load_from_missing_file_is_noop(tmp_path):
    cfg = Config(DEFAULTS)
    cfg.load_from_file(tmp_path / "absent.py")
    assert cfg.get("forms.locale") == "en"


def test_typed_getters():
    cfg = Config({"n": "12", "flag": "yes", "bad": "x"})
    assert cfg.get_int("n") == 12
    assert cfg.get_int("bad", 7) == 7
    assert cfg.get_bool("flag") is True
    assert cfg.get_str("missing", "d") == "d"


def test_mapping_access():
    cfg = Config({"a": {"b": 1}})
    assert cfg["a.b"] == 1
    assert "a.b" in cfg
    cfg["a.c"] = 2
    assert cfg.get("a.c") == 2
    with pytest.raises(KeyError):
        cfg["a.missing"]
