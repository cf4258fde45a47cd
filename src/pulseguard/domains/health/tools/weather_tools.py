"""MCP tool for weather-driven blood pressure risk.

The caller supplies the reading (from any weather service); this server does
not fetch weather itself.
"""

from __future__ import annotations

import json
from dataclasses import asdict

from fastmcp import Context, FastMCP

from pulseguard.domains.health.domain_logic.models import WeatherReading
from pulseguard.domains.health.domain_logic.weather import assess_weather


def register_weather_tools(mcp: FastMCP) -> None:
    """Register weather risk tools on the MCP server."""

    @mcp.tool
    async def weather_risk(
        ctx: Context,
        temperature_c: float,
        humidity_percent: float,
    ) -> str:
        """Score how current weather may affect blood pressure.

        Args:
            temperature_c: Air temperature in degrees Celsius.
            humidity_percent: Relative humidity, 0-100.
        """
        reading = WeatherReading(temperature=temperature_c, humidity_percent=humidity_percent)
        risk = assess_weather(reading)
        result = asdict(risk)
        result.update({"status": "ok", "reading": asdict(reading)})
        return json.dumps(result)
