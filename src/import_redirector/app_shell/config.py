import os
from dataclasses import dataclass
from pathlib import Path

from import_redirector.components.redirector import DEFAULT_VCS, RuleRegistry
from import_redirector.rules.models import RedirectorRules

DEFAULT_ADDR = ":http"
DEFAULT_DOC_BASE_URL = "https://godoc.org"
TLS_PORT = 443

NAMED_PORTS = {"http": 80, "https": 443}


def parse_addr(addr: str) -> tuple[str, int]:
    """
    Split a listen address into (host, port).

    The host part may be empty, meaning all interfaces. The port may be a
    number or one of the names in NAMED_PORTS.
    """
    host, sep, port = addr.rpartition(":")
    if not sep:
        raise ValueError(f"Invalid listen address {addr!r}: missing port")

    if port in NAMED_PORTS:
        port_number = NAMED_PORTS[port]
    else:
        try:
            port_number = int(port)
        except ValueError:
            raise ValueError(f"Invalid listen address {addr!r}: unknown port {port!r}") from None
        if not 0 < port_number < 65536:
            raise ValueError(f"Invalid listen address {addr!r}: port out of range")

    return host.strip("[]") or "0.0.0.0", port_number


@dataclass(frozen=True)
class ServerSettings:
    host: str
    port: int
    vcs: str = DEFAULT_VCS
    doc_base_url: str = DEFAULT_DOC_BASE_URL
    tls: bool = False
    cert_dir: Path = Path(".")

    @classmethod
    def resolve(
        cls,
        *,
        addr: str | None,
        vcs: str | None,
        doc_base_url: str | None,
        tls: bool,
        cert_dir: str | None,
        rules: RedirectorRules | None = None,
    ) -> "ServerSettings":
        """
        Merge command line values, the rules file and the environment.

        Command line wins over the rules file, which wins over
        REDIRECTOR_* environment variables.
        """
        host, port = parse_addr(addr or DEFAULT_ADDR)
        if tls:
            port = TLS_PORT

        return cls(
            host=host,
            port=port,
            vcs=(
                vcs
                or (rules.vcs if rules else None)
                or os.environ.get("REDIRECTOR_VCS")
                or DEFAULT_VCS
            ),
            doc_base_url=(
                doc_base_url
                or (rules.doc_base_url if rules else None)
                or os.environ.get("REDIRECTOR_DOC_BASE_URL")
                or DEFAULT_DOC_BASE_URL
            ),
            tls=tls,
            cert_dir=Path(cert_dir) if cert_dir else Path("."),
        )


def resolve_tls_files(registry: RuleRegistry, cert_dir: Path) -> tuple[Path, Path]:
    """
    Locate the certificate and key for the served host.

    Files are named after the host: <host>.crt and <host>.key.
    Raises ValueError if the rules span more than one host.
    Raises FileNotFoundError if either file is missing.
    """
    hosts = registry.hosts
    if len(hosts) != 1:
        raise ValueError(
            f"TLS serving needs exactly one host, rules cover {len(hosts)}: {', '.join(hosts)}"
        )

    host = hosts[0]
    certfile = cert_dir / f"{host}.crt"
    keyfile = cert_dir / f"{host}.key"
    missing = [str(p) for p in (certfile, keyfile) if not p.is_file()]
    if missing:
        raise FileNotFoundError(f"TLS files not found: {', '.join(missing)}")

    return certfile, keyfile
