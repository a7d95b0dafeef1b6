"""Difficulty presets."""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Difficulty:
    """Immutable session parameters chosen at game start.

    Attributes:
        name: Preset identifier.
        population: Number of simulated agents.
        budget: Starting budget.
        income: Budget gained per tick.
        police: Police officers present at game start.
        initially_infected: Agents seeded as UNKNOWINGLY_INFECTED.
        basic_interaction_rate: Mean share of agents interacting per tick.
        max_interaction_variance: Random offset applied to the rate each tick.
        population_factor: Real people represented by one agent.
    """

    name: str
    population: int
    budget: float
    income: float
    police: int = 0
    initially_infected: int = 1
    basic_interaction_rate: float = 0.1
    max_interaction_variance: float = 0.05
    population_factor: int = 50

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Difficulty name must be non-empty")
        if self.population < 2:
            raise ValueError(f"population must be >= 2, got {self.population}")
        if self.police < 0:
            raise ValueError(f"police must be >= 0, got {self.police}")
        if self.initially_infected < 0:
            raise ValueError(
                f"initially_infected must be >= 0, got {self.initially_infected}"
            )
        if self.police + self.initially_infected > self.population:
            raise ValueError(
                "police + initially_infected must not exceed population "
                f"({self.police} + {self.initially_infected} > {self.population})"
            )
        if self.max_interaction_variance < 0:
            raise ValueError(
                "max_interaction_variance must be >= 0, "
                f"got {self.max_interaction_variance}"
            )
        if self.population_factor < 1:
            raise ValueError(
                f"population_factor must be >= 1, got {self.population_factor}"
            )

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Difficulty:
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown difficulty fields: {sorted(unknown)}")
        return cls(**data)

    def to_dict(self) -> dict[str, Any]:
        return dataclasses.asdict(self)


PRESETS: dict[str, Difficulty] = {
    "easy": Difficulty(
        name="easy",
        population=2_000,
        budget=2_000_000,
        income=30_000,
        police=20,
        initially_infected=10,
        basic_interaction_rate=0.1,
        max_interaction_variance=0.05,
    ),
    "normal": Difficulty(
        name="normal",
        population=4_000,
        budget=1_500_000,
        income=25_000,
        police=40,
        initially_infected=40,
        basic_interaction_rate=0.1,
        max_interaction_variance=0.05,
    ),
    "hard": Difficulty(
        name="hard",
        population=8_000,
        budget=1_000_000,
        income=20_000,
        police=40,
        initially_infected=160,
        basic_interaction_rate=0.12,
        max_interaction_variance=0.06,
    ),
}


def preset(name: str) -> Difficulty:
    try:
        return PRESETS[name]
    except KeyError:
        raise KeyError(
            f"Unknown difficulty {name!r}, expected one of {sorted(PRESETS)}"
        ) from None
