"""
Config system - layered settings for the description engine.

Later layers override earlier ones:

1. JSON/YAML files, in the order given (globs expand sorted)
2. A ``.env`` file (``APIDESC_*`` keys only)
3. Process environment (``APIDESC_*`` keys only)
4. Explicit overrides

Environment keys nest on ``__``: ``APIDESC_DESCRIBER__APPLICATION_NAME``
sets ``describer.application_name``. Settings may sit at the top level or
under a ``describer`` section; the section wins.
"""

import importlib
import json
import os
from dataclasses import dataclass, field, fields
from glob import glob
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Tuple

import yaml
from dotenv import dotenv_values

from .faults import ConfigInvalidFault


@dataclass
class DescriberConfig:
    """
    Settings consulted while describing endpoints.

    Attributes:
        application_name: Tag for handlers without a declaring class
        infrastructure_types: Extra framework-supplied parameter types
            (classes, or "module:Class" strings)
        max_workers: Threads used by ``OperationGenerator.describe_all``
    """
    application_name: str = ""
    infrastructure_types: Tuple[type, ...] = field(default_factory=tuple)
    max_workers: int = 1

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DescriberConfig":
        """Build from a settings mapping; private and unknown keys are ignored."""
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in data.items() if k in known and not k.startswith("_")}

        name = values.get("application_name")
        values["application_name"] = "" if name is None else str(name)
        values["infrastructure_types"] = tuple(
            _import_type(item) if isinstance(item, str) else item
            for item in values.get("infrastructure_types") or ()
        )
        values["max_workers"] = _positive_int("max_workers", values.get("max_workers", 1))
        return cls(**values)


def _positive_int(key: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigInvalidFault(key, f"expected an integer, got {value!r}")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ConfigInvalidFault(key, f"expected an integer, got {value!r}")
    if number < 1:
        raise ConfigInvalidFault(key, "must be at least 1")
    return number


def _import_type(path: str) -> type:
    module_name, _, attr = path.partition(":")
    if not module_name or not attr:
        raise ConfigInvalidFault("infrastructure_types", f"'{path}' is not of the form 'module:Type'")
    try:
        target: Any = importlib.import_module(module_name)
        for part in attr.split("."):
            target = getattr(target, part)
    except (ImportError, AttributeError) as exc:
        raise ConfigInvalidFault("infrastructure_types", f"cannot import '{path}': {exc}")
    if not isinstance(target, type):
        raise ConfigInvalidFault("infrastructure_types", f"'{path}' is not a class")
    return target


def _read_json(path: Path) -> Any:
    with open(path) as f:
        return json.load(f)


def _read_yaml(path: Path) -> Any:
    with open(path) as f:
        return yaml.safe_load(f)


_FILE_READERS: Dict[str, Callable[[Path], Any]] = {
    ".json": _read_json,
    ".yaml": _read_yaml,
    ".yml": _read_yaml,
}


def deep_merge(target: Dict[str, Any], source: Mapping[str, Any]) -> Dict[str, Any]:
    """Merge ``source`` into ``target`` in place, recursing into nested dicts."""
    for key, value in source.items():
        current = target.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            deep_merge(current, value)
        else:
            target[key] = value
    return target


class ConfigLoader:
    """
    Collects settings from files, ``.env``, the environment and overrides.

    Usage::

        loader = ConfigLoader.load(paths=["apidesc.yaml"], env_file=".env")
        config = loader.to_describer_config()
    """

    SECTION = "describer"

    def __init__(self, env_prefix: str = "APIDESC_"):
        self.env_prefix = env_prefix
        self.config_data: Dict[str, Any] = {}

    @classmethod
    def load(
        cls,
        paths: Optional[Iterable[str]] = None,
        env_prefix: str = "APIDESC_",
        env_file: Optional[str] = None,
        overrides: Optional[Mapping[str, Any]] = None,
    ) -> "ConfigLoader":
        """
        Load every layer.

        Args:
            paths: Config file paths or glob patterns
            env_prefix: Prefix selecting environment keys
            env_file: Path to a .env file; skipped when missing
            overrides: Highest-precedence values
        """
        loader = cls(env_prefix=env_prefix)
        for pattern in paths or ():
            for path_str in sorted(glob(pattern)):
                loader.add_file(Path(path_str))
        if env_file and Path(env_file).exists():
            loader.add_environment(dotenv_values(env_file))
        loader.add_environment(os.environ)
        if overrides:
            deep_merge(loader.config_data, overrides)
        return loader

    def add_file(self, path: Path) -> None:
        reader = _FILE_READERS.get(path.suffix)
        if reader is None:
            return
        data = reader(path)
        if data:
            deep_merge(self.config_data, data)

    def add_environment(self, environ: Mapping[str, Optional[str]]) -> None:
        for key, raw in environ.items():
            if raw is None or not key.startswith(self.env_prefix):
                continue
            *parents, leaf = key[len(self.env_prefix):].lower().split("__")
            node = self.config_data
            for part in parents:
                if not isinstance(node.get(part), dict):
                    node[part] = {}
                node = node[part]
            node[leaf] = coerce_value(raw)

    def get(self, path: str, default: Any = None) -> Any:
        """Look up a dotted path such as ``describer.application_name``."""
        node: Any = self.config_data
        for part in path.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def to_describer_config(self) -> DescriberConfig:
        settings = {k: v for k, v in self.config_data.items() if not isinstance(v, dict)}
        section = self.config_data.get(self.SECTION)
        if isinstance(section, dict):
            settings.update(section)
        return DescriberConfig.from_dict(settings)


def coerce_value(raw: str) -> Any:
    """Turn an environment string into a bool, number, JSON value or str."""
    lowered = raw.lower()
    if lowered in ("true", "yes"):
        return True
    if lowered in ("false", "no"):
        return False
    for number in (int, float):
        try:
            return number(raw)
        except ValueError:
            pass
    if raw.startswith(("{", "[")):
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            pass
    return raw
