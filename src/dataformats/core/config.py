# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Library configuration: a ``dataformats`` tree from YAML/TOML and the environment.

Only two sections are read by the library itself, ``dataformats.mapping``
(bound to :class:`~dataformats.core.settings.MappingSettings`) and
``dataformats.logging``. A value under ``dataformats.<section>.<key>`` is
overridden by the environment variable ``DATAFORMATS_<SECTION>_<KEY>``.
"""

from __future__ import annotations

import dataclasses
import importlib.resources
import os
import tomllib
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar, get_type_hints

import yaml  # type: ignore[import-untyped]
from pydantic import BaseModel, ValidationError

from dataformats.kernel.exceptions import FormatConfigurationException

T = TypeVar("T")

_CONFIG_PROPERTIES_ATTR = "__dataformats_config_prefix__"

_ENV_PREFIX = "DATAFORMATS_"

_ROOT_KEY = "dataformats"

_DEFAULTS_FILE = "dataformats-defaults.yaml"

_TRUE_STRINGS = ("true", "1", "yes")


def config_properties(prefix: str) -> Callable[[type[T]], type[T]]:
    """Mark a dataclass or Pydantic model as bindable to *prefix*.

    Usage:
        @config_properties(prefix="dataformats.mapping")
        @dataclass
        class MappingSettings:
            drop_undefined: bool = True
    """

    def decorator(cls: type[T]) -> type[T]:
        setattr(cls, _CONFIG_PROPERTIES_ATTR, prefix)
        return cls

    return decorator


def env_key(key: str) -> str:
    """Environment variable overriding the dot-notation *key*."""
    base = key.removeprefix(f"{_ROOT_KEY}.")
    return _ENV_PREFIX + base.upper().replace(".", "_").replace("-", "_")


class Config:
    """Hierarchical configuration with dot-notation access.

    Priority (highest wins):
    1. Environment variables (``DATAFORMATS_MAPPING_SILENT``)
    2. The loaded file or dict
    3. Packaged library defaults, then dataclass/model defaults
    """

    def __init__(self, data: dict[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = data or {}

    @classmethod
    def from_file(cls, path: str | Path, load_defaults: bool = True) -> Config:
        """Load a ``.yaml``/``.yml`` or ``.toml`` file over the library defaults.

        A missing file leaves only the defaults.
        """
        path = Path(path)
        data = cls._load_library_defaults() if load_defaults else {}
        if path.is_file():
            data = _deep_merge(data, cls._load_config_data(path))
        return cls(data)

    @classmethod
    def defaults(cls) -> Config:
        """Configuration holding only the library defaults."""
        return cls(cls._load_library_defaults())

    @staticmethod
    def _load_config_data(path: Path) -> dict[str, Any]:
        if path.suffix == ".toml":
            with open(path, "rb") as f:
                return tomllib.load(f)
        with open(path) as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise FormatConfigurationException(
                "Configuration file must hold a mapping at the top level",
                context={"path": str(path)},
            )
        return data

    @staticmethod
    def _load_library_defaults() -> dict[str, Any]:
        defaults_file = importlib.resources.files("dataformats.resources").joinpath(_DEFAULTS_FILE)
        return yaml.safe_load(defaults_file.read_text(encoding="utf-8")) or {}

    def _lookup(self, key: str) -> Any:
        current: Any = self._data
        for part in key.split("."):
            if not isinstance(current, dict):
                return None
            current = current.get(part)
            if current is None:
                return None
        return current

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value by dot-notation key, checking env vars first."""
        env_val = os.environ.get(env_key(key))
        if env_val is not None:
            return env_val
        current = self._lookup(key)
        return default if current is None else current

    def get_section(self, prefix: str) -> dict[str, Any]:
        """Get all values under a prefix as a dict."""
        current = self._lookup(prefix)
        return current if isinstance(current, dict) else {}

    def bind(self, config_cls: type[T]) -> T:
        """Bind configuration to a @config_properties dataclass or Pydantic model.

        Environment overrides apply to each declared field.
        """
        prefix = getattr(config_cls, _CONFIG_PROPERTIES_ATTR, None)
        if prefix is None:
            raise FormatConfigurationException(
                f"{config_cls.__name__} is not decorated with @config_properties",
                context={"class": config_cls.__name__},
            )

        if isinstance(config_cls, type) and issubclass(config_cls, BaseModel):
            section = dict(self.get_section(prefix))
            for name in config_cls.model_fields:
                value = self.get(f"{prefix}.{name}")
                if value is not None:
                    section[name] = value
            try:
                return config_cls.model_validate(section)
            except ValidationError as exc:
                raise FormatConfigurationException(
                    f"Configuration validation failed for '{config_cls.__name__}' (prefix='{prefix}'):\n{exc}",
                    context={"class": config_cls.__name__, "prefix": prefix},
                ) from exc

        hints = get_type_hints(config_cls)
        kwargs: dict[str, Any] = {}
        for field in dataclasses.fields(config_cls):  # type: ignore[arg-type]
            value = self.get(f"{prefix}.{field.name}")
            if value is None:
                continue
            kwargs[field.name] = _coerce(value, hints.get(field.name), f"{prefix}.{field.name}")
        return config_cls(**kwargs)


def _coerce(value: Any, expected_type: Any, key: str) -> Any:
    if not isinstance(value, str):
        return value
    try:
        if expected_type is int:
            return int(value)
        if expected_type is float:
            return float(value)
    except ValueError as exc:
        raise FormatConfigurationException(
            f"Configuration key '{key}' expects {expected_type.__name__}, got {value!r}",
            context={"key": key, "value": value},
        ) from exc
    if expected_type is bool:
        return value.lower() in _TRUE_STRINGS
    return value


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge override into base, with override values winning."""
    merged = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged
