"""MCP Prompts: pre-built interaction templates for blood pressure check-ins."""

from __future__ import annotations

from fastmcp import FastMCP


def register_health_prompts(mcp: FastMCP) -> None:
    """Register health domain MCP prompts."""

    @mcp.prompt()
    def bp_check_in_prompt() -> str:
        """Prompt template for a blood pressure check-in."""
        return """I'd like to log today's health check-in. Please:

1. Ask me for my blood pressure, heart rate, sleep, stress, and salt intake
2. Submit them with submit_health_assessment
3. Run health_analysis and explain my BP stage, risk score, and readiness
4. List the recommendations that matter most for me this week

This is not medical advice; tell me when a reading means I should see a doctor."""

    @mcp.prompt()
    def progress_review_prompt(time_period: str = "last month") -> str:
        """Prompt template for reviewing progress over a period."""
        return f"""Let's review my blood pressure progress for {time_period}. I'd like to:

1. See how my readings and risk score changed (use progress_summary)
2. Know whether my latest stage is better or worse than before
3. Identify which habits are holding my numbers back
4. Get two or three concrete goals for the next few weeks"""
