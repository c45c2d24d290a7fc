"""
Go import routes.

Answers every request under a registered import path with the go-import
meta tag for client tooling and a refresh to the documentation site.

Key behaviors:
- Resolution path is the Host header plus URL path, one trailing slash trimmed
- <import_path>/.ping answers "pong" without matching
- Unmatched paths get 404
- Rendering failures get 500 with the error text
"""

from __future__ import annotations

import html
import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, Response

from import_redirector.api.deps import get_doc_base_url, get_registry
from import_redirector.components.redirector import (
    Record,
    ResolveInput,
    RuleRegistry,
    doc_url,
    go_import_content,
    run_resolve,
)

logger = logging.getLogger(__name__)

router = APIRouter()


# --- HTML Rendering ---


def render_go_import_page(record: Record, doc_base_url: str) -> str:
    """Render the redirect page for a resolved record."""
    content = html.escape(go_import_content(record))
    docs = doc_url(record, doc_base_url)
    docs_attr = html.escape(docs)
    docs_text = html.escape(docs.split("://", 1)[-1])

    return f"""<!DOCTYPE html>
<html>
<head>
<meta http-equiv="Content-Type" content="text/html; charset=utf-8"/>
<meta name="go-import" content="{content}">
<meta http-equiv="refresh" content="0; url={docs_attr}">
</head>
<body>
Redirecting to docs at <a href="{docs_attr}">{docs_text}</a>...
</body>
</html>
"""


def request_path(request: Request) -> str:
    """Host plus URL path, as received."""
    return request.headers.get("host", "") + request.url.path


# --- Routes ---


@router.api_route("/{path:path}", methods=["GET", "HEAD"], response_model=None)
def handle_go_import(
    request: Request,
    registry: RuleRegistry = Depends(get_registry),
    doc_base_url: str = Depends(get_doc_base_url),
) -> Response:
    """
    Resolve the request against the registry.

    Returns the go-import page, the ping acknowledgement or 404.
    """
    raw_path = request_path(request)
    if registry.is_ping_path(raw_path):
        return PlainTextResponse("pong")

    result = run_resolve(ResolveInput(path=raw_path.removesuffix("/")), registry=registry)
    if result.record is None:
        logger.debug(f"No rule for {raw_path}")
        return PlainTextResponse("404 page not found", status_code=404)

    try:
        body = render_go_import_page(result.record, doc_base_url)
    except Exception as e:
        logger.exception(f"Rendering failed for {raw_path}")
        return PlainTextResponse(str(e), status_code=500)

    return HTMLResponse(body)
