"""Agent variants held by the population store."""
from __future__ import annotations

from dataclasses import dataclass

from tick_quarantine.types import HealthState, Role


@dataclass(slots=True, eq=False)
class Agent:
    """Anonymous protocol agent.

    Identity is the object itself: two agents with the same state and role
    are still different agents.
    """

    state: HealthState
    role: Role = Role.CITIZEN

    @property
    def eligible(self) -> bool:
        """True if the agent may be reassigned to a privileged role."""
        return not self.role.privileged


def citizen(state: HealthState = HealthState.HEALTHY) -> Agent:
    return Agent(state, Role.CITIZEN)


def police(state: HealthState = HealthState.HEALTHY) -> Agent:
    return Agent(state, Role.POLICE)


def health_worker(state: HealthState = HealthState.CURE) -> Agent:
    return Agent(state, Role.HEALTH_WORKER)


_FACTORIES = {
    Role.CITIZEN: citizen,
    Role.POLICE: police,
    Role.HEALTH_WORKER: health_worker,
}


def make_agent(role: Role, state: HealthState) -> Agent:
    return _FACTORIES[role](state)
