from __future__ import annotations

from dataclasses import fields
from pathlib import Path
from typing import Any, Dict

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .model import CFG_FILE, GeneratorConfig
from ..errors import ConfigError
from ..template.escaping import list_escapers

_yaml = YAML(typ="safe")

_HEADER_MODES = ("auto", "none")


def cfg_path(root: Path) -> Path:
    return (root / CFG_FILE).resolve()


def _expect_str(name: str, value: Any) -> str:
    if not isinstance(value, str):
        raise ConfigError(f"{CFG_FILE}: '{name}' must be a string")
    return value


def _expect_str_list(name: str, value: Any) -> list[str]:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"{CFG_FILE}: '{name}' must be a list of strings")
    return list(value)


def _expect_bool(name: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"{CFG_FILE}: '{name}' must be true or false")
    return value


def _parse(raw: Dict[str, Any]) -> GeneratorConfig:
    known = {f.name for f in fields(GeneratorConfig)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ConfigError(f"{CFG_FILE}: unknown key(s): {', '.join(unknown)}")

    values: Dict[str, Any] = {}
    for name, value in raw.items():
        if name == "template_suffix":
            suffix = _expect_str(name, value)
            if not suffix:
                raise ConfigError(f"{CFG_FILE}: 'template_suffix' must not be empty")
            values[name] = suffix
        elif name in ("data_suffixes", "exclude"):
            values[name] = _expect_str_list(name, value)
        elif name == "escape":
            esc = _expect_str(name, value)
            if esc not in list_escapers():
                raise ConfigError(f"{CFG_FILE}: 'escape' must be one of: {', '.join(list_escapers())}")
            values[name] = esc
        elif name == "header":
            mode = _expect_str(name, value)
            if mode not in _HEADER_MODES:
                raise ConfigError(f"{CFG_FILE}: 'header' must be one of: {', '.join(_HEADER_MODES)}")
            values[name] = mode
        elif name == "comment_prefix":
            values[name] = None if value is None else _expect_str(name, value)
        elif name == "strict":
            values[name] = _expect_bool(name, value)
        elif name == "jobs":
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ConfigError(f"{CFG_FILE}: 'jobs' must be a positive integer")
            values[name] = value

    return GeneratorConfig(**values)


def load_config(root: Path) -> GeneratorConfig:
    """
    Load mgen.yaml from the project root.

    A missing file means defaults.

    Raises:
        ConfigError: For malformed YAML, unknown keys or wrongly typed values
    """
    path = cfg_path(root)
    if not path.is_file():
        return GeneratorConfig()
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except YAMLError as e:
        raise ConfigError(f"{CFG_FILE}: invalid YAML: {e}") from e
    if not isinstance(raw, dict):
        raise ConfigError(f"{CFG_FILE}: top level must be a mapping")
    return _parse(raw)
