"""
Formcraft Configuration Management
==================================

Centralized configuration with support for:
- Multiple configuration sources (defaults, files, env, runtime)
- Hierarchical configuration with dot notation
- Type-safe access with defaults

Configuration Loading Priority (highest to lowest):
1. Runtime overrides
2. Environment variables (FORMCRAFT_*)
3. Python config file
4. Default values

Example:
    # forms_config.py
    config = {
        "forms": {
            "locale": "zh_CN",
            "name_prefix": "n_",
        },
    }

    cfg = get_config()
    cfg.load_from_file(Path("forms_config.py"))
    locale = cfg.get("forms.locale", "en")
"""

from __future__ import annotations

import importlib.util
import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, TypeVar, Union

T = TypeVar("T")

ENV_PREFIX = "FORMCRAFT_"

DEFAULTS: Dict[str, Any] = {
    "forms": {
        "locale": "en",
        "name_prefix": "n_",
        "id_prefix": "i_",
    },
    "logging": {
        "level": "INFO",
        "format": "text",
    },
}


@dataclass
class ConfigSource:
    """One named layer of settings; higher priority wins."""
    name: str
    data: Dict[str, Any]
    priority: int = 0


def _assign(target: Dict[str, Any], key: str, value: Any) -> None:
    """Store ``value`` under a dotted ``key``, creating sections on the way."""
    *sections, last = key.split(".")
    for section in sections:
        target = target.setdefault(section, {})
    target[last] = value


def _overlay(base: Dict[str, Any], layer: Dict[str, Any]) -> Dict[str, Any]:
    """Return ``base`` updated with ``layer``; nested sections are merged."""
    merged = dict(base)
    for key, value in layer.items():
        if isinstance(value, dict):
            current = merged.get(key)
            merged[key] = _overlay(current if isinstance(current, dict) else {}, value)
        else:
            merged[key] = value
    return merged


class Config:
    """
    Layered settings for the toolkit.

    Keys are dotted paths into nested sections ("forms.locale").
    Every change to the layers drops the lookup cache.

    Example:
        cfg = Config(DEFAULTS)
        cfg.set("forms.locale", "zh_CN")

        cfg.get("forms.locale")          # "zh_CN"
        cfg.get("forms.missing", "x")    # "x"
    """

    def __init__(self, defaults: Optional[Dict[str, Any]] = None) -> None:
        self._sources: List[ConfigSource] = []
        self._cache: Dict[str, Any] = {}
        self._merged: Optional[Dict[str, Any]] = None

        if defaults:
            self.add_source("defaults", defaults, priority=0)

    def load_from_file(self, path: Path) -> None:
        """
        Layer the settings of a Python file over the defaults.

        The file defines either a ``config`` dict or public
        module-level names, each becoming a top-level key.
        A missing file is ignored.
        """
        if not path.exists():
            return

        spec = importlib.util.spec_from_file_location("formcraft_config", path)
        if spec is None or spec.loader is None:
            return

        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)

        data = getattr(module, "config", None)
        if not isinstance(data, dict):
            data = {k: v for k, v in vars(module).items() if not k.startswith("_")}
        self.add_source(f"file:{path.name}", data, priority=10)

    def load_env(self, environ: Optional[Dict[str, str]] = None) -> None:
        """Layer FORMCRAFT_* variables; FORMCRAFT_FORMS__LOCALE sets forms.locale."""
        environ = os.environ if environ is None else environ
        overrides: Dict[str, Any] = {}

        for name, raw in environ.items():
            if name.startswith(ENV_PREFIX):
                key = name[len(ENV_PREFIX):].lower().replace("__", ".")
                _assign(overrides, key, self._parse_env_value(raw))

        if overrides:
            self.add_source("env_vars", overrides, priority=100)

    @staticmethod
    def _parse_env_value(raw: str) -> Any:
        lowered = raw.lower()
        if lowered in ("true", "yes"):
            return True
        if lowered in ("false", "no"):
            return False
        if raw.lstrip("-").isdigit():
            return int(raw)
        if raw.startswith(("{", "[")):
            try:
                return json.loads(raw)
            except json.JSONDecodeError:
                return raw
        return raw

    def add_source(
        self,
        name: str,
        data: Dict[str, Any],
        priority: int = 0,
    ) -> None:
        self._sources.append(ConfigSource(name=name, data=data, priority=priority))
        self._invalidate()

    def _invalidate(self) -> None:
        self._merged = None
        self._cache.clear()

    def _layers(self) -> Dict[str, Any]:
        if self._merged is None:
            merged: Dict[str, Any] = {}
            for source in sorted(self._sources, key=lambda s: s.priority):
                merged = _overlay(merged, source.data)
            self._merged = merged
        return self._merged

    def get(
        self,
        key: str,
        default: T = None,
    ) -> Union[Any, T]:
        """
        Look up a dotted key.

        Args:
            key: Dotted path (e.g., "forms.locale")
            default: Returned when any part of the path is missing
        """
        if key in self._cache:
            return self._cache[key]

        node: Any = self._layers()
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]

        self._cache[key] = node
        return node

    def get_str(self, key: str, default: str = "") -> str:
        value = self.get(key)
        return default if value is None else str(value)

    def get_int(self, key: str, default: int = 0) -> int:
        try:
            return int(self.get(key, default))
        except (TypeError, ValueError):
            return default

    def get_bool(self, key: str, default: bool = False) -> bool:
        value = self.get(key, default)
        if isinstance(value, str):
            return value.lower() in ("true", "yes", "1")
        return bool(value)

    def set(self, key: str, value: Any) -> None:
        """Set a value in the runtime layer, which outranks every other source."""
        runtime = next((s for s in self._sources if s.name == "runtime"), None)
        if runtime is None:
            runtime = ConfigSource(name="runtime", data={}, priority=1000)
            self._sources.append(runtime)

        _assign(runtime.data, key, value)
        self._invalidate()

    def has(self, key: str) -> bool:
        return self.get(key) is not None

    def __getitem__(self, key: str) -> Any:
        value = self.get(key)
        if value is None:
            raise KeyError(key)
        return value

    def __setitem__(self, key: str, value: Any) -> None:
        self.set(key, value)

    def __contains__(self, key: str) -> bool:
        return self.has(key)


_config: Optional[Config] = None


def get_config() -> Config:
    """Process-wide configuration: defaults plus environment overrides."""
    global _config
    if _config is None:
        _config = Config(DEFAULTS)
        _config.load_env()
    return _config


def reset_config() -> None:
    """Drop the global configuration so the next access rebuilds it."""
    global _config
    _config = None


def config(key: str, default: Any = None) -> Any:
    """Shortcut for ``get_config().get(key, default)``."""
    return get_config().get(key, default)
