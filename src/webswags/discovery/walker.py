"""Recursive discovery of spec files under a project root."""

import logging
import os
import stat
from collections.abc import Iterator
from concurrent.futures import ThreadPoolExecutor

from .detect import SPEC_EXTENSIONS
from .errors import NotASpecDocument, WalkError
from .models import SpecDocument
from .parser import parse_spec_file

log = logging.getLogger(__name__)


def discover(root: str | os.PathLike, workers: int = 1) -> list[SpecDocument]:
    """Find and parse every OpenAPI/Swagger document under ``root``.

    Service names are derived from each file's path relative to ``root``.
    Files that cannot be read or are not spec documents are skipped. The
    result is sorted by service name (then path, so equal names keep a
    stable order). Raises WalkError only when the root itself cannot be
    traversed.
    """
    root = os.fspath(root)
    candidates = list(iter_candidate_files(root))
    base = root if os.path.isdir(root) else os.path.dirname(root)
    relative = [os.path.relpath(path, base) if base else path for path in candidates]
    log.debug("Found %d candidate files under %s", len(candidates), root)

    if workers > 1 and len(candidates) > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            results = list(pool.map(_try_parse, candidates, relative))
    else:
        results = [_try_parse(path, rel) for path, rel in zip(candidates, relative)]

    specs = [spec for spec in results if spec is not None]
    specs.sort(key=lambda s: (s.service, s.path))
    return specs


def iter_candidate_files(root: str) -> Iterator[str]:
    """Yield regular files under ``root`` with a spec extension, in walk order."""
    try:
        root_stat = os.stat(root)
    except OSError as e:
        raise WalkError(root, e) from e

    if stat.S_ISREG(root_stat.st_mode):
        if has_spec_extension(root):
            yield root
        return

    def on_error(err: OSError) -> None:
        if os.path.normpath(err.filename or "") == os.path.normpath(root):
            raise WalkError(root, err) from err
        log.debug("Skipping unreadable entry %s: %s", err.filename, err.strerror)

    for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
        dirnames.sort()
        for filename in sorted(filenames):
            path = os.path.join(dirpath, filename)
            if not has_spec_extension(filename):
                continue
            if _is_regular_file(path):
                yield path


def has_spec_extension(path: str) -> bool:
    return os.path.splitext(path)[1].lower() in SPEC_EXTENSIONS


def _is_regular_file(path: str) -> bool:
    try:
        return stat.S_ISREG(os.lstat(path).st_mode)
    except OSError as e:
        log.debug("Skipping unreadable entry %s: %s", path, e.strerror)
        return False


def _try_parse(path: str, rel_path: str) -> SpecDocument | None:
    try:
        return parse_spec_file(path, name_path=rel_path)
    except NotASpecDocument as e:
        log.debug("Skipping %s", e)
        return None
    except OSError as e:
        log.warning("Failed to read spec candidate %s: %s", path, e)
        return None


def find_service_collisions(specs: list[SpecDocument]) -> dict[str, list[str]]:
    """Map each service name shared by more than one spec to the paths sharing it."""
    by_service: dict[str, list[str]] = {}
    for spec in specs:
        by_service.setdefault(spec.service, []).append(spec.path)
    return {service: paths for service, paths in by_service.items() if len(paths) > 1}
