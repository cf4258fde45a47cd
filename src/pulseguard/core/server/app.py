"""PulseGuard Health MCP server assembly.

``create_app()`` builds a fresh server (tests pass their own store and
randomness source). The module-level ``mcp`` attribute is what FastMCP's
discovery imports.
"""

from __future__ import annotations

import logging

from fastmcp import FastMCP

from pulseguard.core.config.settings import Settings, get_settings
from pulseguard.core.storage.database import HealthDatabase
from pulseguard.core.storage.encryption import EncryptionError, RecordCipher
from pulseguard.core.storage.repository import HealthRepository
from pulseguard.core.storage.store import HealthStore, InMemoryHealthStore
from pulseguard.domains.health.domain_logic.blood_pressure import RandomSource
from pulseguard.domains.health.prompts.health_prompts import register_health_prompts
from pulseguard.domains.health.tools.assessment_tools import register_assessment_tools
from pulseguard.domains.health.tools.progress_tools import register_progress_tools
from pulseguard.domains.health.tools.weather_tools import register_weather_tools

logger = logging.getLogger(__name__)

SERVER_NAME = "PulseGuard Health"
SERVER_VERSION = "0.1.0"


def _build_store(settings: Settings) -> HealthStore:
    """Encrypted SQLite store when a key is configured, memory otherwise."""
    if not settings.encryption_key:
        logger.info("ENCRYPTION_KEY unset; records are kept in memory until restart")
        return InMemoryHealthStore(history_limit=settings.history_limit)

    try:
        cipher = RecordCipher(settings.encryption_key)
    except EncryptionError as exc:
        logger.error("Cannot use ENCRYPTION_KEY (%s); falling back to in-memory records", exc)
        return InMemoryHealthStore(history_limit=settings.history_limit)

    database = HealthDatabase(settings.db_path)
    database.initialize()
    return HealthRepository(database, cipher, history_limit=settings.history_limit)


def create_app(
    *,
    store_override: HealthStore | None = None,
    rng_override: RandomSource | None = None,
) -> FastMCP:
    """Build a PulseGuard server with its store, tools, and prompts.

    Without ``store_override`` the store comes from settings: encrypted
    SQLite when ENCRYPTION_KEY is set, in-memory otherwise. ``rng_override``
    replaces the trend projection's randomness source.
    """
    settings = get_settings()

    server = FastMCP(
        SERVER_NAME,
        instructions=(
            "PulseGuard personal health server. Classifies blood pressure, scores "
            "hypertension risk, stability and readiness, gives lifestyle "
            "recommendations, tracks progress over time, and produces reports. "
            "Results are informational and not medical advice."
        ),
    )

    store = store_override if store_override is not None else _build_store(settings)

    @server.tool
    async def health_check() -> dict:
        """Report server identity and what the record store currently holds."""
        return {
            "status": "ok",
            "server": SERVER_NAME,
            "version": SERVER_VERSION,
            "storage": type(store).__name__,
            "history_limit": store.history_limit,
            "history_entries": len(store.history()),
            "has_current_record": store.get() is not None,
        }

    register_assessment_tools(
        server,
        store,
        report_lines_per_page=settings.report_lines_per_page,
        rng=rng_override,
    )
    register_progress_tools(server, store)
    register_weather_tools(server)
    logger.info("Health tools registered")

    register_health_prompts(server)

    return server


# Module-level instance for FastMCP discovery. Lazy: only created when the
# attribute is first read, so importing create_app has no side effects.
def __getattr__(name: str):
    if name == "mcp":
        global mcp  # noqa: PLW0603
        mcp = create_app()
        return mcp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
