"""tick-quarantine - Population protocol epidemic simulation for the tick engine."""
from __future__ import annotations

from tick_quarantine.agents import Agent, citizen, health_worker, make_agent, police
from tick_quarantine.config import PRESETS, Difficulty, preset
from tick_quarantine.economy import EconomyState, StatsSnapshot
from tick_quarantine.population import PopulationStore, populate
from tick_quarantine.rules import RuleSet, TransitionRule, cure_rules, default_rules
from tick_quarantine.scheduler import TickReport, TimeController
from tick_quarantine.simulation import Simulation, interaction_count
from tick_quarantine.types import HealthState, PopulationError, Role

__all__ = [
    "Agent",
    "citizen",
    "police",
    "health_worker",
    "make_agent",
    "Difficulty",
    "PRESETS",
    "preset",
    "EconomyState",
    "StatsSnapshot",
    "PopulationStore",
    "populate",
    "TransitionRule",
    "RuleSet",
    "default_rules",
    "cure_rules",
    "TickReport",
    "TimeController",
    "Simulation",
    "interaction_count",
    "HealthState",
    "Role",
    "PopulationError",
]
