"""Service name derivation.

A display name comes from the first strategy in ``STRATEGIES`` that produces
a non-empty formatted name:

1. the document title;
2. the segment just before the deepest API-marker segment
   (``spec``, ``api``, ``openapi``...), unless that segment is generic;
3. the file's parent directory, unless it is generic;
4. the file name without its extension.

Examples::

    derive_name("  loyalty  ", "connector/loyalty/spec/loyalty.yaml")  # "Loyalty"
    derive_name("", "connector/loyalty/spec/loyalty.yaml")             # "Loyalty"
    derive_name("", "apis/user-service/openapi.yaml")                  # "User Service"
    derive_name("", "docs/petstore/swagger.json")                      # "Petstore"

Title-casing is a plain per-word transform: ``"UserAPI"`` becomes
``"Userapi"``, since nothing separates the two words.
"""

import os
import re
from collections.abc import Callable, Sequence

API_MARKER_DIRS = frozenset({"spec", "specs", "api", "apis", "swagger", "openapi", "oas"})
GENERIC_DIRS = frozenset({"docs", "doc", "documentation", "specifications", "specs", "", ".", "/"})

DEFAULT_SERVICE_NAME = "Unnamed Service"

_SEPARATORS = re.compile(r"[-_]")
_WHITESPACE = re.compile(r"\s+")

Strategy = Callable[[str, Sequence[str]], str | None]


def format_service_name(value: str) -> str:
    """Turn a raw title or path segment into a title-cased display name."""
    value = _SEPARATORS.sub(" ", value)
    value = _WHITESPACE.sub(" ", value).strip()
    return " ".join(word.capitalize() for word in value.split(" ") if word)


def split_path(path: str) -> list[str]:
    """Split a path into segments on the platform separator."""
    if not path:
        return []
    return os.path.normpath(path).split(os.sep)


def _is_generic(segment: str) -> bool:
    return segment.lower() in GENERIC_DIRS


def title_strategy(title: str, segments: Sequence[str]) -> str | None:
    if title and title.strip():
        return format_service_name(title)
    return None


def marker_parent_strategy(title: str, segments: Sequence[str]) -> str | None:
    # Deepest first; a marker needs a segment before it
    for i in range(len(segments) - 1, 0, -1):
        if segments[i].lower() not in API_MARKER_DIRS:
            continue
        before = segments[i - 1]
        if not _is_generic(before):
            return format_service_name(before)
    return None


def parent_dir_strategy(title: str, segments: Sequence[str]) -> str | None:
    if len(segments) < 2:
        return None
    parent = segments[-2]
    if _is_generic(parent):
        return None
    return format_service_name(parent)


def file_stem_strategy(title: str, segments: Sequence[str]) -> str | None:
    if not segments:
        return None
    base = segments[-1]
    if base in (".", os.sep):
        return None
    stem, _ = os.path.splitext(base)
    return format_service_name(stem or base)


STRATEGIES: tuple[Strategy, ...] = (
    title_strategy,
    marker_parent_strategy,
    parent_dir_strategy,
    file_stem_strategy,
)


def derive_name(title: str | None, path: str) -> str:
    """Derive a non-empty display name for a spec from its title and path."""
    segments = split_path(path)
    for strategy in STRATEGIES:
        name = strategy(title or "", segments)
        if name:
            return name
    return DEFAULT_SERVICE_NAME
