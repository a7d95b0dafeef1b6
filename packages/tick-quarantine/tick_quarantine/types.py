"""Health states, roles and errors shared across the simulation."""
from __future__ import annotations

from enum import Enum


class HealthState(str, Enum):
    HEALTHY = "healthy"
    INFECTED = "infected"
    UNKNOWINGLY_INFECTED = "unknowingly_infected"
    DECEASED = "deceased"
    IMMUNE = "immune"
    CURE = "cure"


class Role(str, Enum):
    CITIZEN = "citizen"
    POLICE = "police"
    HEALTH_WORKER = "health_worker"

    @property
    def privileged(self) -> bool:
        return self is not Role.CITIZEN


class PopulationError(Exception):
    """Raised when sampling needs more agents than the population holds."""

    def __init__(self, size: int, message: str) -> None:
        self.size = size
        super().__init__(message)
