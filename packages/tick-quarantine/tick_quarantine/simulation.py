"""Simulation - population protocol tick loop and upgrade operations."""
from __future__ import annotations

import math
import os
import random
from typing import Callable, Iterable

from loguru import logger

from tick_quarantine.agents import Agent
from tick_quarantine.config import Difficulty
from tick_quarantine.economy import EconomyState, StatsSnapshot
from tick_quarantine.population import PopulationStore, populate
from tick_quarantine.rules import RuleSet, TransitionRule, cure_rules, default_rules
from tick_quarantine.types import HealthState, Role

DeathCallback = Callable[["Simulation", Agent], None]


def interaction_count(rate: float, population: int) -> int:
    """Number of pairwise interactions for one tick, never negative."""
    return max(0, math.floor(rate * population))


class Simulation:
    """Owns the population, the rule set and the economy of one game session.

    ``tick()`` advances the protocol by one step. The upgrade methods
    change the population's role composition and the rule set; each either
    applies completely and returns True, or returns False without touching
    any state.
    """

    def __init__(
        self,
        difficulty: Difficulty,
        seed: int | None = None,
        rules: Iterable[TransitionRule] | None = None,
        on_death: DeathCallback | None = None,
    ) -> None:
        if seed is None:
            seed = int.from_bytes(os.urandom(8))
        self._seed = seed
        self._rng = random.Random(seed)
        self._difficulty = difficulty
        self._on_death = on_death
        self._tick_number = 0

        self._store = populate(difficulty.population, difficulty.police, self._rng)
        self._rules = RuleSet(default_rules() if rules is None else rules)
        self._economy = EconomyState(
            budget=difficulty.budget,
            income=difficulty.income,
            population=len(self._store),
            nbr_police=difficulty.police,
            basic_interaction_rate=difficulty.basic_interaction_rate,
            max_interaction_variance=difficulty.max_interaction_variance,
            population_factor=difficulty.population_factor,
        )
        self.seed_infections(difficulty.initially_infected)

    # -- Setup --

    def seed_infections(self, count: int) -> None:
        """Mark *count* random healthy agents as unknowingly infected."""
        _check_count(count)
        healthy = self._store.count_state(HealthState.HEALTHY)
        if count > healthy:
            raise ValueError(
                f"Cannot infect {count} agents, only {healthy} are healthy"
            )
        infected = 0
        while infected < count:
            idx = self._store.sample_index()
            if self._store.get(idx).state is HealthState.HEALTHY:
                self._store.set_health_state(idx, HealthState.UNKNOWINGLY_INFECTED)
                infected += 1
        logger.debug(f"Seeded {count} unknowingly infected agents")

    # -- Tick --

    def interaction_rate(self) -> float:
        """Basic rate shifted up or down by the variance, redrawn per call."""
        sign = 1 if self._rng.random() < 0.5 else -1
        eco = self._economy
        return eco.basic_interaction_rate + sign * eco.max_interaction_variance

    def tick(self) -> int:
        """Run one tick. Returns the number of interactions performed."""
        store = self._store
        interactions = interaction_count(self.interaction_rate(), len(store))
        performed = 0
        for _ in range(interactions):
            if len(store) < 2:
                break
            i, j = store.sample_distinct_pair()
            self._rules.find_and_apply(store.get(i), store.get(j))
            performed += 1
            # Higher index first so the lower one stays valid.
            for idx in sorted((i, j), reverse=True):
                if store.get(idx).state is HealthState.DECEASED:
                    self._remove_dead(idx)

        self._economy.infected = store.count_state(HealthState.INFECTED)
        self._economy.accrue()
        self._tick_number += 1
        return performed

    def _remove_dead(self, index: int) -> None:
        agent = self._store.remove_at(index)
        eco = self._economy
        eco.population -= 1
        eco.deceased += 1
        if agent.role is Role.POLICE:
            eco.nbr_police -= 1
        elif agent.role is Role.HEALTH_WORKER:
            eco.nbr_health_workers -= 1
        if self._on_death is not None:
            self._on_death(self, agent)

    # -- Upgrades --

    def introduce_cure(self, price: float, count: int) -> bool:
        """Unlock the cure rules and turn *count* agents into health workers.

        Must run before ``buy_health_workers``: health workers bought
        earlier carry CURE but no rule acts on it until this is called.
        """
        _check_count(count)
        if self._economy.eligible < count:
            logger.debug(
                f"introduce_cure rejected: {count} requested, "
                f"{self._economy.eligible} eligible"
            )
            return False
        self._economy.debit(price)
        self._rules.extend(cure_rules())
        self._assign_roles(count, Role.HEALTH_WORKER)
        logger.debug(f"Cure introduced with {count} health workers for {price}")
        return True

    def buy_police_officers(self, price: float, count: int) -> bool:
        if not self.distribute_roles(count, Role.POLICE):
            return False
        self._economy.debit(price)
        return True

    def buy_health_workers(self, price: float, count: int) -> bool:
        if not self.distribute_roles(count, Role.HEALTH_WORKER):
            return False
        self._economy.debit(price)
        return True

    def distribute_roles(self, count: int, role: Role) -> bool:
        """Assign *role* to *count* random eligible agents.

        Police keep their health state; health workers start in CURE.
        Returns False when fewer than *count* agents are eligible.
        """
        _check_count(count)
        if not role.privileged:
            logger.warning(f"distribute_roles called with non-privileged role {role.value!r}")
            return False
        if self._economy.eligible < count:
            logger.debug(
                f"{role.value} purchase rejected: {count} requested, "
                f"{self._economy.eligible} eligible"
            )
            return False
        self._assign_roles(count, role)
        logger.debug(f"Assigned {count} agents to {role.value}")
        return True

    def _assign_roles(self, count: int, role: Role) -> None:
        store = self._store
        assigned = 0
        while assigned < count:
            idx = store.sample_index()
            agent = store.get(idx)
            if not agent.eligible:
                continue
            state = HealthState.CURE if role is Role.HEALTH_WORKER else agent.state
            store.reassign_role(idx, role, state)
            assigned += 1

        if role is Role.POLICE:
            self._economy.nbr_police += count
        else:
            self._economy.nbr_health_workers += count
        self._economy.infected = store.count_state(HealthState.INFECTED)

    # -- Read accessors --

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def difficulty(self) -> Difficulty:
        return self._difficulty

    @property
    def tick_number(self) -> int:
        return self._tick_number

    @property
    def store(self) -> PopulationStore:
        return self._store

    @property
    def rule_set(self) -> RuleSet:
        return self._rules

    @property
    def economy(self) -> EconomyState:
        return self._economy

    @property
    def rules(self) -> tuple[TransitionRule, ...]:
        return self._rules.rules()

    @property
    def budget(self) -> float:
        return self._economy.budget

    @property
    def income(self) -> float:
        return self._economy.income

    @property
    def population(self) -> int:
        return self._economy.display_population

    @property
    def deceased(self) -> int:
        return self._economy.display_deceased

    @property
    def infected(self) -> int:
        """Scaled known cases; unknowingly infected agents are not included."""
        return self._economy.display_infected

    @property
    def police(self) -> int:
        return self._economy.display_police

    @property
    def health_workers(self) -> int:
        return self._economy.display_health_workers

    def snapshot(self) -> StatsSnapshot:
        return StatsSnapshot.of(self._economy, self._tick_number, len(self._rules))


def _check_count(count: int) -> None:
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")
