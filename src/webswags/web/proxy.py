"""CORS relay for requests made from the Swagger UI "Try it out" panel.

Usage: /proxy?url={target-url}
"""

import logging

import requests
from flask import Blueprint, Response, current_app, request

log = logging.getLogger(__name__)

proxy_bp = Blueprint("proxy", __name__)

PROXY_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS", "HEAD", "TRACE"]

ALLOW_METHODS = "GET, POST, PUT, PATCH, DELETE, OPTIONS, HEAD, CONNECT, TRACE"
ALLOW_HEADERS = "Content-Type, Authorization, X-Requested-With, Accept, X-API-Key, X-Custom-Header"
PREFLIGHT_MAX_AGE = "3600"

# Not forwarded back: requests already decoded and de-chunked the body
SKIPPED_RESPONSE_HEADERS = {
    "connection",
    "content-encoding",
    "content-length",
    "keep-alive",
    "proxy-authenticate",
    "proxy-authorization",
    "te",
    "trailer",
    "transfer-encoding",
    "upgrade",
}


def set_cors_headers(response: Response) -> Response:
    response.headers["Access-Control-Allow-Origin"] = "*"
    response.headers["Access-Control-Allow-Methods"] = ALLOW_METHODS
    response.headers["Access-Control-Allow-Headers"] = ALLOW_HEADERS
    return response


def _preflight() -> Response:
    response = set_cors_headers(Response(status=200))
    response.headers["Access-Control-Max-Age"] = PREFLIGHT_MAX_AGE
    return response


def _forward_headers() -> dict[str, str]:
    return {key: value for key, value in request.headers.items() if key.lower() != "host"}


def _forward_params() -> list[tuple[str, str]]:
    return [(key, value) for key, value in request.args.items(multi=True) if key != "url"]


@proxy_bp.route("/proxy", methods=PROXY_METHODS)
def handle_proxy():
    """Forward the request to ``url`` and relay the answer with CORS headers."""
    target_url = request.args.get("url", "")
    if not target_url:
        return Response(
            "Target URL is required. Usage: /proxy?url={target-url}\n",
            status=400,
            mimetype="text/plain",
        )

    if request.method == "OPTIONS":
        return _preflight()

    settings = current_app.config["WEBSWAGS_SETTINGS"]
    try:
        upstream = requests.request(
            request.method,
            target_url,
            headers=_forward_headers(),
            params=_forward_params(),
            data=request.get_data(),
            timeout=settings.proxy_timeout,
            stream=True,
            allow_redirects=False,
        )
    except requests.RequestException as e:
        log.error("Proxy request failed for %s: %s", target_url, e)
        return Response(f"Proxy request failed: {e}\n", status=502, mimetype="text/plain")

    body = upstream.iter_content(chunk_size=settings.proxy_chunk_size)
    response = Response(body, status=upstream.status_code)
    # Runs even when the body is never iterated (HEAD, client gone)
    response.call_on_close(upstream.close)
    for key, value in upstream.headers.items():
        if key.lower() not in SKIPPED_RESPONSE_HEADERS:
            response.headers[key] = value
    set_cors_headers(response)

    log.info("Proxy request completed: %s %s -> %d", request.method, target_url, upstream.status_code)
    return response
