"""Pairwise transition rules and first-match rule lookup."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator

from tick_quarantine.agents import Agent
from tick_quarantine.types import HealthState


@dataclass(frozen=True, slots=True)
class TransitionRule:
    """Immutable protocol transition.

    Matches an interacting pair whose states equal ``(input1, input2)`` in
    either order and maps them to ``(output1, output2)``, keeping each output
    attached to the agent that matched the corresponding input.
    """

    input1: HealthState
    input2: HealthState
    output1: HealthState
    output2: HealthState

    def match(
        self, a: HealthState, b: HealthState,
    ) -> tuple[HealthState, HealthState] | None:
        """Return the new states for ``(a, b)``, or None if the rule does not apply."""
        if self.input1 == a and self.input2 == b:
            return self.output1, self.output2
        if self.input1 == b and self.input2 == a:
            return self.output2, self.output1
        return None


class RuleSet:
    """Ordered, append-only collection of transition rules."""

    def __init__(self, rules: Iterable[TransitionRule] = ()) -> None:
        self._rules: list[TransitionRule] = list(rules)

    def append(self, rule: TransitionRule) -> None:
        self._rules.append(rule)

    def extend(self, rules: Iterable[TransitionRule]) -> None:
        self._rules.extend(rules)

    def rules(self) -> tuple[TransitionRule, ...]:
        return tuple(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[TransitionRule]:
        return iter(self._rules)

    def __contains__(self, rule: object) -> bool:
        return rule in self._rules

    def find(
        self, a: HealthState, b: HealthState,
    ) -> tuple[TransitionRule, tuple[HealthState, HealthState]] | None:
        for rule in self._rules:
            outputs = rule.match(a, b)
            if outputs is not None:
                return rule, outputs
        return None

    def find_and_apply(self, agent_a: Agent, agent_b: Agent) -> TransitionRule | None:
        """Apply the first rule matching the pair. Returns the fired rule.

        At most one rule fires per interaction, even when later rules would
        also match. Without a match both agents are left unchanged.
        """
        found = self.find(agent_a.state, agent_b.state)
        if found is None:
            return None
        rule, (new_a, new_b) = found
        agent_a.state = new_a
        agent_b.state = new_b
        return rule


def default_rules() -> list[TransitionRule]:
    """Rules active at game start."""
    H = HealthState
    return [
        TransitionRule(H.HEALTHY, H.INFECTED, H.UNKNOWINGLY_INFECTED, H.INFECTED),
        TransitionRule(H.HEALTHY, H.UNKNOWINGLY_INFECTED,
                       H.UNKNOWINGLY_INFECTED, H.UNKNOWINGLY_INFECTED),
        TransitionRule(H.INFECTED, H.INFECTED, H.INFECTED, H.DECEASED),
    ]


def cure_rules() -> list[TransitionRule]:
    """Rules unlocked by introducing a cure: CURE carriers immunise their partner."""
    H = HealthState
    return [
        TransitionRule(source, H.CURE, H.IMMUNE, H.CURE)
        for source in (H.HEALTHY, H.INFECTED, H.UNKNOWINGLY_INFECTED)
    ]
