"""Risk package - operational signals derived from weather readings."""

from .classifier import (
    CongestionLevel,
    DelayFactor,
    RiskAssessment,
    RiskClassifier,
    Severity,
    delay_probability,
    runway_congestion,
    waiting_time,
)

__all__ = [
    "CongestionLevel",
    "DelayFactor",
    "RiskAssessment",
    "RiskClassifier",
    "Severity",
    "delay_probability",
    "runway_congestion",
    "waiting_time",
]
