"""Detect spec file format and decode file content into a JSON-compatible tree."""

import datetime
import json
import os
from typing import Any

import yaml

from .errors import NotASpecDocument

JSON_FORMAT = "json"
YAML_FORMAT = "yaml"

SPEC_EXTENSIONS = {".yaml": YAML_FORMAT, ".yml": YAML_FORMAT, ".json": JSON_FORMAT}

_LEADING_WHITESPACE = " \t\r\n"


def detect_format(path: str, content: bytes) -> str:
    """Detect whether a spec file is JSON or YAML.

    The extension decides when it is one of the known ones; otherwise the
    first non-whitespace character of the content does. Ambiguous input is
    treated as YAML.

    Returns: 'json' or 'yaml'.
    """
    ext = os.path.splitext(path)[1].lower()
    if ext in SPEC_EXTENSIONS:
        return SPEC_EXTENSIONS[ext]
    if looks_like_json(content):
        return JSON_FORMAT
    return YAML_FORMAT


def looks_like_json(content: bytes | str) -> bool:
    """True when the content starts with '{' or '[' after leading whitespace."""
    if isinstance(content, bytes):
        content = content.decode("utf-8", errors="replace")
    return content.lstrip(_LEADING_WHITESPACE).startswith(("{", "["))


def load_tree(content: bytes, path: str = "<memory>") -> Any:
    """Decode spec content into a JSON-compatible tree.

    JSON-looking content is parsed directly as JSON. Anything else is parsed
    as YAML and then converted, so mapping keys are strings and scalars are
    limited to what JSON can express.
    """
    try:
        text = content.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise NotASpecDocument(path, f"not UTF-8 text ({e.reason})") from e

    if looks_like_json(text):
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise NotASpecDocument(path, f"invalid JSON: {e.msg} (line {e.lineno})") from e
        except RecursionError as e:
            raise NotASpecDocument(path, "document nests too deeply") from e

    try:
        return yaml_to_json_tree(yaml.safe_load(text))
    except yaml.YAMLError as e:
        raise NotASpecDocument(path, f"invalid YAML: {e}") from e
    except RecursionError as e:
        # Self-referencing anchors (a: &a [*a]) load as cyclic structures
        raise NotASpecDocument(path, "document nests too deeply") from e


def yaml_to_json_tree(value: Any) -> Any:
    """Convert a YAML-loaded value into the subset JSON can represent."""
    if isinstance(value, dict):
        return {_json_key(k): yaml_to_json_tree(v) for k, v in value.items()}
    if isinstance(value, (list, tuple, set)):
        return [yaml_to_json_tree(v) for v in value]
    if isinstance(value, (datetime.date, datetime.datetime)):
        return value.isoformat()
    if isinstance(value, bytes):
        return value.decode("utf-8", errors="replace")
    return value


def _json_key(key: Any) -> str:
    if isinstance(key, str):
        return key
    if key is None:
        return "null"
    if isinstance(key, bool):
        return "true" if key else "false"
    if isinstance(key, (datetime.date, datetime.datetime)):
        return key.isoformat()
    return str(key)
