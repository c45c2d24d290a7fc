from fastapi import Request

from import_redirector.components.redirector import RuleRegistry


# --- Registry ---
def get_registry(request: Request) -> RuleRegistry:
    return request.app.state.registry


# --- Rendering ---
def get_doc_base_url(request: Request) -> str:
    return request.app.state.doc_base_url
