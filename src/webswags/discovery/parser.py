"""OpenAPI / Swagger document parser.

Parses a spec file into a SpecDocument. OpenAPI 3.x/3.1 is tried first; the
Swagger 2.0 loader only runs when that attempt fails, so a 3.x document is
never partially read as 2.0.
"""

import json
import logging
import os
from typing import Any

from pydantic import ValidationError

from .detect import detect_format, load_tree
from .errors import NotASpecDocument
from .models import Contact, Info, License, OpenAPI3View, SpecDocument, Swagger2View
from .naming import derive_name
from .schema import DocInfo, OpenAPI3Document, Swagger2Document

log = logging.getLogger(__name__)

OPENAPI3_SECTIONS = ("servers", "paths", "components", "security", "tags", "externalDocs", "webhooks")
SWAGGER2_SECTIONS = (
    "paths",
    "definitions",
    "parameters",
    "responses",
    "securityDefinitions",
    "security",
    "tags",
    "externalDocs",
)


def parse_spec_file(path: str | os.PathLike, name_path: str | None = None) -> SpecDocument:
    """Parse a YAML or JSON file into a SpecDocument.

    The service name is derived from ``name_path`` when given (discovery
    passes the path relative to its root), otherwise from ``path``.

    Raises OSError when the file cannot be read and NotASpecDocument when it
    is neither an OpenAPI 3.x/3.1 nor a Swagger 2.0 document.
    """
    path = os.fspath(path)
    with open(path, "rb") as f:
        data = f.read()
    return parse_spec_bytes(path, data, name_path)


def parse_spec_bytes(path: str, data: bytes, name_path: str | None = None) -> SpecDocument:
    """Parse already-read spec content."""
    fmt = detect_format(path, data)

    doc3 = load_openapi3(data, path)
    if doc3 is not None:
        view = _openapi3_view(doc3)
        return _build(path, name_path or path, data, fmt, view, doc3)

    doc2 = load_swagger2(data, path)
    if doc2 is not None:
        view = _swagger2_view(doc2)
        return _build(path, name_path or path, data, fmt, view, doc2)

    raise NotASpecDocument(path)


def load_openapi3(data: bytes, path: str = "<memory>") -> OpenAPI3Document | None:
    """Load content as an OpenAPI 3.x/3.1 document, or None if it is not one."""
    try:
        tree = load_tree(data, path)
    except NotASpecDocument as e:
        log.debug("OpenAPI 3 load failed for %s: %s", path, e.reason)
        return None
    if not _has_marker(tree, "openapi"):
        return None
    try:
        return OpenAPI3Document.model_validate(tree)
    except ValidationError as e:
        log.debug("OpenAPI 3 structure rejected for %s: %d errors", path, e.error_count())
        return None


def load_swagger2(data: bytes, path: str = "<memory>") -> Swagger2Document | None:
    """Load content as a Swagger 2.0 document, or None if it is not one.

    JSON-looking content is parsed as JSON; anything else goes through YAML
    and is converted to a JSON tree first.
    """
    try:
        tree = load_tree(data, path)
    except NotASpecDocument as e:
        log.debug("Swagger 2 load failed for %s: %s", path, e.reason)
        return None
    if not _has_marker(tree, "swagger"):
        return None
    try:
        return Swagger2Document.model_validate(tree)
    except ValidationError as e:
        log.debug("Swagger 2 structure rejected for %s: %d errors", path, e.error_count())
        return None


def _has_marker(tree: Any, key: str) -> bool:
    if not isinstance(tree, dict):
        return False
    marker = tree.get(key)
    if isinstance(marker, bool) or not isinstance(marker, (str, int, float)):
        return False
    return bool(str(marker).strip())


def _build(
    path: str,
    name_path: str,
    data: bytes,
    fmt: str,
    view: OpenAPI3View | Swagger2View,
    canonical: OpenAPI3Document | Swagger2Document,
) -> SpecDocument:
    name = derive_name(view.info.title, name_path)
    return SpecDocument(
        path=path,
        file_name=os.path.basename(path),
        format=fmt,
        raw=data,
        view=view,
        name=name,
        service=name,
        canonical=canonical,
    )


def _openapi3_view(doc: OpenAPI3Document) -> OpenAPI3View:
    sections = _sections(doc, OPENAPI3_SECTIONS)
    return OpenAPI3View(
        openapi=doc.openapi.strip(),
        info=to_info(doc.info),
        json_schema_dialect=_strip_or_none(doc.json_schema_dialect),
        **sections,
    )


def _swagger2_view(doc: Swagger2Document) -> Swagger2View:
    sections = _sections(doc, SWAGGER2_SECTIONS)
    return Swagger2View(
        swagger=doc.swagger.strip(),
        info=to_info(doc.info),
        host=_strip_or_none(doc.host),
        base_path=_strip_or_none(doc.base_path),
        schemes=doc.schemes or None,
        consumes=doc.consumes or None,
        produces=doc.produces or None,
        **sections,
    )


def _sections(doc: OpenAPI3Document | Swagger2Document, names: tuple[str, ...]) -> dict[str, Any]:
    """Collect the named sections as opaque JSON payloads, skipping null ones."""
    # Python mode keeps non-finite floats (.inf, .nan) that JSON mode nulls out
    dumped = doc.model_dump(by_alias=True, include=_field_names(doc, names))
    sections = {}
    for alias in names:
        payload = to_payload(dumped.get(alias))
        if payload is not None:
            sections[alias] = payload
    return sections


def _field_names(doc: OpenAPI3Document | Swagger2Document, aliases: tuple[str, ...]) -> set[str]:
    fields = type(doc).model_fields
    return {name for name, field in fields.items() if (field.alias or name) in aliases}


def to_payload(value: Any) -> Any:
    """Re-serialize a value into a detached JSON tree; None when it serializes to null."""
    if value is None:
        return None
    encoded = json.dumps(value)
    if encoded == "null":
        return None
    return json.loads(encoded)


def to_info(info: DocInfo | None) -> Info:
    """Project a document's info block, trimming every string."""
    if info is None:
        return Info()
    contact = None
    if info.contact is not None:
        contact = Contact(
            name=info.contact.name.strip(),
            url=info.contact.url.strip(),
            email=info.contact.email.strip(),
        )
    license_ = None
    if info.license is not None:
        license_ = License(name=info.license.name.strip(), url=info.license.url.strip())
    return Info(
        title=info.title.strip(),
        version=info.version.strip(),
        description=info.description.strip(),
        terms_of_service=info.terms_of_service.strip(),
        contact=contact,
        license=license_,
    )


def _strip_or_none(value: str | None) -> str | None:
    if value is None:
        return None
    return value.strip() or None
