"""Flask application serving the discovered specs."""

import json
import logging

import yaml
from flask import Flask, Response, abort, jsonify, render_template, request

from webswags.config import Settings
from webswags.discovery.detect import JSON_FORMAT, YAML_FORMAT
from webswags.discovery.models import SpecDocument
from webswags.discovery.naming import format_service_name
from webswags.discovery.schema import dump_document
from webswags.web.proxy import proxy_bp

log = logging.getLogger(__name__)

FORMAT_COLORS = {JSON_FORMAT: "#f39c12", YAML_FORMAT: "#27ae60"}
CONTENT_TYPES = {JSON_FORMAT: "application/json", YAML_FORMAT: "text/yaml"}


def format_color(fmt: str) -> str:
    """Badge colour for a spec format."""
    return FORMAT_COLORS.get(fmt, FORMAT_COLORS[YAML_FORMAT])


def find_spec(specs: list[SpecDocument], service: str, fmt: str | None = None) -> SpecDocument | None:
    """First spec (in sorted order) with this service name and, if given, format."""
    for spec in specs:
        if spec.service == service and (fmt is None or spec.format == fmt):
            return spec
    return None


def render_spec(spec: SpecDocument, fmt: str) -> bytes:
    """The spec file in the requested format.

    The original bytes are served when the formats match; otherwise the
    canonical document is re-serialized.
    """
    if spec.format == fmt:
        return spec.raw
    doc = dump_document(spec.canonical)
    if fmt == JSON_FORMAT:
        return json.dumps(doc, indent=2).encode("utf-8")
    return yaml.safe_dump(doc, sort_keys=False, allow_unicode=True).encode("utf-8")


def create_app(specs: list[SpecDocument], settings: Settings | None = None) -> Flask:
    """Build the web app around an already-discovered, sorted spec list."""
    app = Flask(__name__)
    app.config["WEBSWAGS_SETTINGS"] = settings or Settings()
    app.config["WEBSWAGS_SPECS"] = specs
    app.register_blueprint(proxy_bp)

    @app.before_request
    def log_request():
        log.info("Request %s %s", request.method, request.full_path.rstrip("?"))

    @app.after_request
    def allow_any_origin(response: Response) -> Response:
        response.headers.setdefault("Access-Control-Allow-Origin", "*")
        return response

    @app.get("/")
    def index():
        return render_template(
            "index.html",
            services=specs,
            total_services=len(specs),
            empty=not specs,
            format_color=format_color,
        )

    @app.get("/service/<service>")
    def service_page(service: str):
        spec = find_spec(specs, service)
        fmt = spec.format if spec else YAML_FORMAT
        return render_template(
            "service.html",
            service=service,
            service_title=format_service_name(service),
            swagger_ui_version=app.config["WEBSWAGS_SETTINGS"].swagger_ui_version,
            redoc_version=app.config["WEBSWAGS_SETTINGS"].redoc_version,
            format=fmt,
            format_color=format_color(fmt),
            spec_url=f"/api/specs/{service}/swagger.{fmt}",
        )

    @app.get("/api/specs")
    def list_specs():
        return jsonify([spec.summary() for spec in specs])

    @app.get("/api/specs/<service>/swagger.<fmt>")
    def spec_file(service: str, fmt: str):
        if fmt not in CONTENT_TYPES:
            abort(404)
        spec = find_spec(specs, service, fmt) or find_spec(specs, service)
        if spec is None:
            abort(404)
        return Response(render_spec(spec, fmt), content_type=CONTENT_TYPES[fmt])

    return app
