"""Weather-driven blood pressure risk."""

from __future__ import annotations

from pulseguard.domains.health.domain_logic.models import (
    Severity,
    WeatherReading,
    WeatherRisk,
    WeatherRiskLevel,
)
from pulseguard.domains.health.domain_logic.numeric import clamp

WEATHER_ADVICE: dict[WeatherRiskLevel, str] = {
    WeatherRiskLevel.LOW: "Current weather conditions are favorable for BP management.",
    WeatherRiskLevel.MODERATE: "Take precautions - stay hydrated and avoid extreme exertion.",
    WeatherRiskLevel.HIGH: "Weather conditions may elevate BP. Stay indoors and monitor closely.",
}

WEATHER_SEVERITY: dict[WeatherRiskLevel, Severity] = {
    WeatherRiskLevel.LOW: Severity.SUCCESS,
    WeatherRiskLevel.MODERATE: Severity.WARNING,
    WeatherRiskLevel.HIGH: Severity.DANGER,
}


def get_weather_risk(temperature_c: float, humidity_percent: float) -> WeatherRisk:
    """Score temperature and humidity extremes.

    Temperature bands are mutually exclusive (heat checked before cold).
    Dry air is checked separately from damp air.
    """
    score = 0
    if temperature_c > 35:
        score += 30
    elif temperature_c > 30:
        score += 15
    elif temperature_c < 5:
        score += 25
    elif temperature_c < 10:
        score += 12

    if humidity_percent > 80:
        score += 20
    elif humidity_percent > 60:
        score += 10
    if humidity_percent < 20:
        score += 15

    if score <= 20:
        level = WeatherRiskLevel.LOW
    elif score <= 45:
        level = WeatherRiskLevel.MODERATE
    else:
        level = WeatherRiskLevel.HIGH

    return WeatherRisk(
        level=level,
        score=int(clamp(score)),
        severity=WEATHER_SEVERITY[level],
        advice=WEATHER_ADVICE[level],
    )


def assess_weather(reading: WeatherReading) -> WeatherRisk:
    """Convenience wrapper for a :class:`WeatherReading`."""
    return get_weather_risk(reading.temperature, reading.humidity_percent)
