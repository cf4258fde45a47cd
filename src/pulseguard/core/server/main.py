"""Run the PulseGuard server: ``python -m pulseguard.core.server.main``."""

from __future__ import annotations

import logging
from ipaddress import ip_address

from pulseguard.core.config.settings import Settings, get_settings
from pulseguard.core.server.app import SERVER_NAME, create_app

logger = logging.getLogger(__name__)


def _binds_loopback_only(host: str) -> bool:
    if host.lower() == "localhost":
        return True
    try:
        return ip_address(host).is_loopback
    except ValueError:
        # Hostnames other than localhost may resolve anywhere
        return False


def _check_bind(settings: Settings) -> None:
    """The tools have no auth layer, so public binds need an explicit opt-in.

    Raises:
        RuntimeError: If the host is not loopback and the override is off.
    """
    if settings.pulseguard_allow_insecure_bind or _binds_loopback_only(settings.pulseguard_host):
        return
    raise RuntimeError(
        f"Refusing to serve health records on non-loopback host "
        f"{settings.pulseguard_host!r}. Set PULSEGUARD_ALLOW_INSECURE_BIND=true to override."
    )


def run() -> None:
    """Serve PulseGuard over Streamable HTTP."""
    settings = get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.pulseguard_log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    _check_bind(settings)

    logger.info(
        "Starting %s on %s:%d", SERVER_NAME, settings.pulseguard_host, settings.pulseguard_port
    )
    create_app().run(
        transport="streamable-http",
        host=settings.pulseguard_host,
        port=settings.pulseguard_port,
    )


if __name__ == "__main__":
    run()
