"""PopulationStore - authoritative agent list with random sampling."""
from __future__ import annotations

import random
from typing import Callable, Iterable, Iterator

from tick_quarantine.agents import Agent, citizen, make_agent, police
from tick_quarantine.types import HealthState, PopulationError, Role


class PopulationStore:
    """Ordered, mutable collection of agents indexed ``0..len-1``.

    Removal compacts the list, so indices are only valid until the next
    removal. Nothing outside a single interaction should hold on to one.
    """

    def __init__(self, rng: random.Random, agents: Iterable[Agent] = ()) -> None:
        self._rng = rng
        self._agents: list[Agent] = list(agents)

    def __len__(self) -> int:
        return len(self._agents)

    def __iter__(self) -> Iterator[Agent]:
        return iter(self._agents)

    # -- Sampling --

    def sample_index(self) -> int:
        size = len(self._agents)
        if size == 0:
            raise PopulationError(size, "Cannot sample from an empty population")
        return self._rng.randrange(size)

    def sample_distinct_pair(self) -> tuple[int, int]:
        size = len(self._agents)
        if size < 2:
            raise PopulationError(
                size, f"Cannot sample a distinct pair from {size} agent(s)"
            )
        i = self.sample_index()
        j = self.sample_index()
        while j == i:
            j = self.sample_index()
        return i, j

    # -- Access and mutation --

    def get(self, index: int) -> Agent:
        return self._agents[index]

    def set_health_state(self, index: int, state: HealthState) -> None:
        self._agents[index].state = state

    def remove_at(self, index: int) -> Agent:
        return self._agents.pop(index)

    def reassign_role(self, index: int, role: Role, state: HealthState) -> Agent:
        """Replace the agent at *index* with a fresh *role* agent in *state*."""
        current = self._agents[index]
        if not current.eligible:
            raise ValueError(
                f"Agent at index {index} already holds role {current.role.value!r}"
            )
        agent = make_agent(role, state)
        self._agents[index] = agent
        return agent

    # -- Statistics --

    def count_by(self, predicate: Callable[[Agent], bool]) -> int:
        return sum(1 for agent in self._agents if predicate(agent))

    def count_state(self, state: HealthState) -> int:
        return self.count_by(lambda agent: agent.state is state)

    def count_role(self, role: Role) -> int:
        return self.count_by(lambda agent: agent.role is role)


def populate(size: int, police_count: int, rng: random.Random) -> PopulationStore:
    """Build *size* healthy agents, *police_count* of them police at random slots."""
    if size < 0:
        raise ValueError(f"size must be >= 0, got {size}")
    if not 0 <= police_count <= size:
        raise ValueError(
            f"police_count must be between 0 and {size}, got {police_count}"
        )
    police_slots = set(rng.sample(range(size), police_count))
    agents = [police() if i in police_slots else citizen() for i in range(size)]
    return PopulationStore(rng, agents)
