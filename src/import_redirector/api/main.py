import logging
import os
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI

from import_redirector import __version__
from import_redirector.api.routes import go_import
from import_redirector.app_shell.config import DEFAULT_DOC_BASE_URL
from import_redirector.components.redirector import (
    DEFAULT_VCS,
    BuildRegistryInput,
    RuleConfigurationError,
    RuleRegistry,
    run_build,
)
from import_redirector.rules.loader import load_rules

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    registry: RuleRegistry = app.state.registry
    logger.info(
        f"Serving {len(registry)} rules for {', '.join(registry.hosts) or 'no hosts'} "
        f"(vcs={registry.vcs})"
    )
    yield


def create_app(
    registry: RuleRegistry,
    *,
    doc_base_url: str = DEFAULT_DOC_BASE_URL,
) -> FastAPI:
    """
    Build the application around a finalized registry.

    The registry is stored on app.state and read by the route
    dependencies; it is never modified after this point.
    """
    app = FastAPI(
        title="Import Redirector",
        version=__version__,
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.registry = registry
    app.state.doc_base_url = doc_base_url

    # --- Routers ---
    app.include_router(go_import.router, prefix="", tags=["Go Import"])

    return app


def create_app_from_env() -> FastAPI:
    """
    Application factory for ASGI servers.

    Reads the rules file named by REDIRECTOR_CONFIG (default rules.yaml).
    Fails fast on an invalid or empty rule set.
    """
    rules_path = Path(os.environ.get("REDIRECTOR_CONFIG", "rules.yaml"))
    rules = load_rules(rules_path)

    vcs = rules.vcs or os.environ.get("REDIRECTOR_VCS") or DEFAULT_VCS
    result = run_build(BuildRegistryInput(pairs=tuple(rules.iter_pairs())), vcs=vcs)
    if result.registry is None:
        raise RuleConfigurationError(result.errors)
    if len(result.registry) == 0:
        raise ValueError(f"No modules configured in {rules_path}")

    logger.info(f"Rules loaded from {rules_path}")
    return create_app(
        result.registry,
        doc_base_url=(
            rules.doc_base_url
            or os.environ.get("REDIRECTOR_DOC_BASE_URL")
            or DEFAULT_DOC_BASE_URL
        ),
    )
