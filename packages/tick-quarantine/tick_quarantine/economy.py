"""Budget, income and population counters."""
from __future__ import annotations

from dataclasses import dataclass


@dataclass
class EconomyState:
    """Mutable game counters.

    Raw counters describe the simulated (sampled) population; the
    ``display_*`` properties project them onto the real population by
    multiplying with ``population_factor``.

    Attributes:
        budget: Available money. May go negative, affordability is checked
            by the caller.
        income: Added to the budget once per tick.
        population: Live agents.
        deceased: Agents removed since the game started.
        infected: Agents in the INFECTED state (known cases only).
        nbr_police: Live police officers.
        nbr_health_workers: Live health workers.
        basic_interaction_rate: Mean share of the population interacting per tick.
        max_interaction_variance: Offset added to or subtracted from the rate.
        population_factor: Display multiplier for raw counters.
    """

    budget: float
    income: float
    population: int
    deceased: int = 0
    infected: int = 0
    nbr_police: int = 0
    nbr_health_workers: int = 0
    basic_interaction_rate: float = 0.1
    max_interaction_variance: float = 0.05
    population_factor: int = 50

    @property
    def eligible(self) -> int:
        """Agents that hold no privileged role."""
        return self.population - self.nbr_police - self.nbr_health_workers

    def debit(self, price: float) -> None:
        self.budget -= price

    def accrue(self) -> None:
        self.budget += self.income

    def scaled(self, value: int) -> int:
        return value * self.population_factor

    @property
    def display_population(self) -> int:
        return self.scaled(self.population)

    @property
    def display_deceased(self) -> int:
        return self.scaled(self.deceased)

    @property
    def display_infected(self) -> int:
        return self.scaled(self.infected)

    @property
    def display_police(self) -> int:
        return self.scaled(self.nbr_police)

    @property
    def display_health_workers(self) -> int:
        return self.scaled(self.nbr_health_workers)


@dataclass(frozen=True)
class StatsSnapshot:
    """Read-only end-of-tick view for display code."""

    tick: int
    budget: float
    income: float
    population: int
    deceased: int
    infected: int
    police: int
    health_workers: int
    rule_count: int

    @classmethod
    def of(cls, economy: EconomyState, tick: int, rule_count: int) -> StatsSnapshot:
        return cls(
            tick=tick,
            budget=economy.budget,
            income=economy.income,
            population=economy.display_population,
            deceased=economy.display_deceased,
            infected=economy.display_infected,
            police=economy.display_police,
            health_workers=economy.display_health_workers,
            rule_count=rule_count,
        )
