"""Configuration helpers for roster rules and run settings."""

from .roster import (
    FD_NFL,
    MIN_SALARY_DEFAULT,
    SALARY_CAP,
    RosterRules,
    get_rules,
)
from .settings import ATTEMPTS_PER_LINEUP, NewsMode, OptimizationSettings

__all__ = [
    "ATTEMPTS_PER_LINEUP",
    "FD_NFL",
    "MIN_SALARY_DEFAULT",
    "NewsMode",
    "OptimizationSettings",
    "RosterRules",
    "SALARY_CAP",
    "get_rules",
]
