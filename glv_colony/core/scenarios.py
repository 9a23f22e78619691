"""Scenario presets — named growth-rate regimes.

Selecting a scenario only swaps the growth rates; the interaction matrix,
the time step and the current populations are left alone.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Scenario(str, Enum):
    BALANCED = "balanced"
    EXPLOSIVE_GROWTH = "explosive-growth"
    COLLAPSE = "collapse"


class InvalidScenarioError(ValueError):
    """Raised when a selection tag does not name a known scenario."""

    def __init__(self, tag: object) -> None:
        known = ", ".join(s.value for s in Scenario)
        super().__init__(f"unknown scenario {tag!r} (expected one of: {known})")
        self.tag = tag


@dataclass(frozen=True)
class ScenarioPreset:
    scenario: Scenario
    growth_rates: tuple[float, float, float]
    description: str


PRESETS: dict[Scenario, ScenarioPreset] = {
    Scenario.BALANCED: ScenarioPreset(
        Scenario.BALANCED,
        (0.5, 0.3, 0.4),
        "Balanced: predator, prey and competitor settle into stable coexistence.",
    ),
    Scenario.EXPLOSIVE_GROWTH: ScenarioPreset(
        Scenario.EXPLOSIVE_GROWTH,
        (1.5, 1.2, 1.3),
        "Explosive growth: high intrinsic growth overwhelms self-limitation.",
    ),
    Scenario.COLLAPSE: ScenarioPreset(
        Scenario.COLLAPSE,
        (-0.8, -0.6, -0.7),
        "Collapse: every species declines towards the extinction floor.",
    ),
}


def parse_scenario(tag: Scenario | str) -> Scenario:
    """Resolve *tag* to a :class:`Scenario` or raise :class:`InvalidScenarioError`."""
    if isinstance(tag, Scenario):
        return tag
    try:
        return Scenario(tag)
    except ValueError:
        raise InvalidScenarioError(tag) from None


def get_preset(tag: Scenario | str) -> ScenarioPreset:
    return PRESETS[parse_scenario(tag)]


def describe_scenario(tag: Scenario | str) -> str:
    """Human-readable description of the preset named by *tag*."""
    return get_preset(tag).description
