"""
Data model loader.

Parses a companion data document (JSON or YAML) into the closed set of
values the renderer understands: None, bool, int, float, str, list and
dict with string keys.
"""

from __future__ import annotations

import datetime
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError, MarkedYAMLError

from ..errors import MGUserError

logger = logging.getLogger(__name__)

DataValue = Union[None, bool, int, float, str, List[Any], Dict[str, Any]]

_yaml = YAML(typ="safe")

# suffix -> format
DATA_FORMATS: Dict[str, str] = {
    ".json": "json",
    ".yaml": "yaml",
    ".yml": "yaml",
}


class DataLoadError(MGUserError):
    """Malformed or unsupported data document."""

    def __init__(self, message: str, source: str = "", line: Optional[int] = None, column: Optional[int] = None):
        self.message = message
        self.source = source
        self.line = line
        self.column = column
        where = source or "<data>"
        if line is not None:
            where += f":{line}:{column or 1}"
        super().__init__(f"{where}: {message}")


def _reject_duplicates(pairs: List[Tuple[str, Any]]) -> Dict[str, Any]:
    result: Dict[str, Any] = {}
    for key, value in pairs:
        if key in result:
            raise ValueError(f"Duplicate key '{key}'")
        result[key] = value
    return result


def _normalize(value: Any, source: str, path: str = "$") -> DataValue:
    """Maps a parsed document onto DataValue, failing on anything else."""
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, (datetime.date, datetime.datetime)):
        # YAML timestamps
        return value.isoformat()
    if isinstance(value, (list, tuple)):
        return [_normalize(item, source, f"{path}[{i}]") for i, item in enumerate(value)]
    if isinstance(value, dict):
        result: Dict[str, Any] = {}
        for key, item in value.items():
            skey = key if isinstance(key, str) else display_key(key)
            if skey in result:
                raise DataLoadError(f"Duplicate key '{skey}' at {path}", source)
            result[skey] = _normalize(item, source, f"{path}.{skey}")
        return result
    raise DataLoadError(f"Unsupported value of type {type(value).__name__} at {path}", source)


def display_key(key: Any) -> str:
    """Non-string YAML keys (numbers, booleans, null) become their JSON text."""
    if isinstance(key, str):
        return key
    try:
        return json.dumps(key)
    except TypeError:
        return str(key)


def _load_json(text: str, source: str) -> Any:
    try:
        return json.loads(text, object_pairs_hook=_reject_duplicates)
    except json.JSONDecodeError as e:
        raise DataLoadError(e.msg, source, e.lineno, e.colno) from e
    except ValueError as e:
        raise DataLoadError(str(e), source) from e


def _load_yaml(text: str, source: str) -> Any:
    try:
        raw = _yaml.load(text)
    except MarkedYAMLError as e:
        mark = e.problem_mark or e.context_mark
        line = mark.line + 1 if mark is not None else None
        column = mark.column + 1 if mark is not None else None
        raise DataLoadError(e.problem or str(e), source, line, column) from e
    except YAMLError as e:
        raise DataLoadError(str(e), source) from e
    # empty document
    return {} if raw is None else raw


def load_data(text: str, fmt: str = "json", source: str = "") -> DataValue:
    """
    Parses a data document.

    Args:
        text: Document text
        fmt: "json" or "yaml"
        source: Path or name used in error messages

    Returns:
        Loaded data tree

    Raises:
        DataLoadError: For a malformed document or an unsupported value
    """
    if fmt not in ("json", "yaml"):
        raise ValueError(f"Unknown data format '{fmt}'")
    try:
        raw = _load_json(text, source) if fmt == "json" else _load_yaml(text, source)
        return _normalize(raw, source)
    except RecursionError:
        raise DataLoadError("Document is nested too deeply", source) from None


def data_format_for(path: Path) -> str:
    fmt = DATA_FORMATS.get(path.suffix.lower())
    if fmt is None:
        raise DataLoadError(
            f"Unsupported data file suffix '{path.suffix}' (expected one of: {', '.join(sorted(DATA_FORMATS))})",
            path.as_posix(),
        )
    return fmt


def load_data_file(path: Path) -> DataValue:
    """
    Loads a data file, choosing the format by suffix.

    Raises:
        DataLoadError: Malformed document or unknown suffix
        OSError: The file cannot be read
    """
    fmt = data_format_for(path)
    text = path.read_text(encoding="utf-8-sig")
    logger.debug("Loading %s data from %s", fmt, path)
    return load_data(text, fmt, path.as_posix())


__all__ = ["DataValue", "DataLoadError", "DATA_FORMATS", "load_data", "load_data_file", "data_format_for"]
