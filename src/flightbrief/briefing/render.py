"""Briefing rendering components."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional, cast

from jinja2 import Environment, FileSystemLoader, Template

from flightbrief.briefing.orchestrator import BriefingState
from flightbrief.risk.classifier import RiskAssessment, RiskClassifier

PLACEHOLDER = "—"


def format_temperature(celsius: float) -> str:
    """Signed whole-degree temperature, e.g. ``+22°``, ``-3°``, ``0°``."""
    sign = "+" if celsius > 0 else ""
    return f"{sign}{int(celsius)}°"


class BriefingContextBuilder:
    """Builds context data for the briefing template.

    Derived values are replaced by a placeholder while the briefing is in
    an error state, so stale numbers are never shown next to an error.
    """

    def __init__(self, classifier: Optional[RiskClassifier] = None) -> None:
        self.classifier = classifier or RiskClassifier()

    def build(
        self, state: BriefingState, assessment: Optional[RiskAssessment] = None
    ) -> Dict[str, Any]:
        """Build complete context for the briefing template.

        Args:
            state: Published orchestrator state
            assessment: Precomputed risk signals (computed on demand if None)

        Returns:
            Template context dictionary
        """
        reading = state.reading
        risk = assessment or self.classifier.assess(reading)
        failed = state.has_error

        def value(text: str) -> str:
            return PLACEHOLDER if failed else text

        return {
            "is_loading": state.is_loading,
            "error": state.error_message if failed else None,
            "temperature": value(format_temperature(reading.temperature_celsius)),
            "city": value(reading.city_name),
            "wind": value(f"{int(reading.wind_speed_kmh)} Km/h"),
            "precipitation": value(reading.category.label),
            "visibility": value(reading.visibility_label),
            "waiting_time": value(risk.waiting_time),
            "runway_congestion": value(risk.runway_congestion.value),
            "possible_delays": value("Yes" if risk.delay_probability else "No"),
            "delay_factors": [
                {"title": f.title, "status": value(f.status), "severity": f.severity.value}
                for f in risk.delay_factors
            ],
        }


class TemplateRenderer:
    """Handles the Jinja2 template environment for text briefings."""

    briefing_template: Template

    def __init__(self, templates_dir: Path, template_name: str = "briefing.txt.j2") -> None:
        """Initialize the template renderer.

        Args:
            templates_dir: Directory containing templates
            template_name: Briefing template file name
        """
        self.templates_dir = templates_dir
        self.env = Environment(
            loader=FileSystemLoader(self.templates_dir),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.briefing_template = self.env.get_template(template_name)

    def render_briefing(self, **context: Any) -> str:
        return cast(str, self.briefing_template.render(**context))
