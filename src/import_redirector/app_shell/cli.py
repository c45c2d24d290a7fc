import argparse
import logging
import os
import sys
from pathlib import Path

import uvicorn

from import_redirector.api.main import create_app
from import_redirector.app_shell.config import (
    DEFAULT_ADDR,
    ServerSettings,
    resolve_tls_files,
)
from import_redirector.components.redirector import BuildRegistryInput, run_build
from import_redirector.rules.loader import load_rules
from import_redirector.rules.models import RedirectorRules

logger = logging.getLogger("import-redirector")

EXAMPLES = """examples:
  import-redirector 'rsc.io/*' 'https://github.com/rsc/*'
  import-redirector 9fans.net/go https://github.com/9fans/go
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="import-redirector",
        description=(
            "Serve go-import meta tags and documentation redirects "
            "for a custom import path domain."
        ),
        usage="%(prog)s [options] <import> <repo> [<import> <repo> ...]",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "pairs",
        nargs="*",
        metavar="<import> <repo>",
        help="import path and repository URL; end both with /* for a wildcard",
    )
    parser.add_argument(
        "--addr", default=None, help=f"serve http on address (default {DEFAULT_ADDR!r})"
    )
    parser.add_argument("--tls", action="store_true", help="serve https on :443")
    parser.add_argument(
        "--cert-dir", default=None, help="directory holding <host>.crt and <host>.key"
    )
    parser.add_argument("--vcs", default=None, help="version control system (default 'git')")
    parser.add_argument(
        "--doc-base-url", default=None, help="documentation site (default https://godoc.org)"
    )
    parser.add_argument(
        "--config",
        default=os.environ.get("REDIRECTOR_CONFIG"),
        help="YAML rules file with additional modules",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="logging level",
    )
    return parser


def split_pairs(values: list[str]) -> list[tuple[str, str]]:
    """Group positional arguments into (import, repo) pairs."""
    if len(values) % 2 != 0:
        raise ValueError("arguments must come in <import> <repo> pairs")
    return [(values[i], values[i + 1]) for i in range(0, len(values), 2)]


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="import-redirector: %(levelname)s %(message)s",
    )

    try:
        pairs = split_pairs(args.pairs)
    except ValueError as e:
        parser.error(str(e))

    rules: RedirectorRules | None = None
    if args.config:
        try:
            rules = load_rules(Path(args.config))
        except (FileNotFoundError, ValueError) as e:
            logger.critical(f"Failed to parse config file, {e}")
            sys.exit(1)
        pairs.extend(rules.iter_pairs())

    if not pairs:
        parser.error("at least one <import> <repo> pair is required")

    try:
        settings = ServerSettings.resolve(
            addr=args.addr,
            vcs=args.vcs,
            doc_base_url=args.doc_base_url,
            tls=args.tls,
            cert_dir=args.cert_dir,
            rules=rules,
        )
    except ValueError as e:
        parser.error(str(e))

    result = run_build(BuildRegistryInput(pairs=tuple(pairs)), vcs=settings.vcs)
    if result.registry is None:
        for error in result.errors:
            logger.critical(error.message)
        sys.exit(1)
    registry = result.registry

    ssl_files: dict[str, str] = {}
    if settings.tls:
        try:
            certfile, keyfile = resolve_tls_files(registry, settings.cert_dir)
        except (FileNotFoundError, ValueError) as e:
            logger.critical(str(e))
            sys.exit(1)
        ssl_files = {"ssl_certfile": str(certfile), "ssl_keyfile": str(keyfile)}

    app = create_app(registry, doc_base_url=settings.doc_base_url)
    logger.info(f"Listening on {settings.host}:{settings.port}")
    uvicorn.run(
        app,
        host=settings.host,
        port=settings.port,
        log_level=args.log_level.lower(),
        **ssl_files,
    )


if __name__ == "__main__":
    main()
