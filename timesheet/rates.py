from __future__ import annotations

import math

from .models import ProjectType, UserChoice

# Hourly rates billed by the fixed identity, per project type.
PROJECT_RATES = {
    ProjectType.BI.value: 35.00,
    ProjectType.DATA_ENGINEERING.value: 42.00,
    ProjectType.DATA_SCIENCE.value: 45.00,
    ProjectType.OTHER.value: 40.00,
}


def rate_for_project(project_type: str) -> float:
    return PROJECT_RATES.get(project_type, 0.0)


def parse_rate(value: str | None) -> float:
    """Parse a user-typed rate; anything unusable becomes 0.

    Both ``12.5`` and ``12,5`` are accepted.
    """
    if not value:
        return 0.0
    try:
        rate = float(value.strip().replace(",", "."))
    except ValueError:
        return 0.0
    if not math.isfinite(rate):
        return 0.0
    return rate


def resolve_hourly_rate(user: str, project_type: str, custom_rate: str | None = None) -> float:
    choice = UserChoice.parse(user)
    if choice is UserChoice.LAVEZZO:
        return rate_for_project(project_type)
    if choice is UserChoice.OTHER:
        return parse_rate(custom_rate)
    return 0.0
