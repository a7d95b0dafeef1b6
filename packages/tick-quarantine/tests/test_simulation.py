"""Tests for Simulation setup and the tick algorithm."""
from __future__ import annotations

import pytest
from tick_quarantine import (
    Difficulty, HealthState, Role, Simulation, TransitionRule, default_rules,
    interaction_count,
)

H = HealthState
CARRIERS = (H.INFECTED, H.UNKNOWINGLY_INFECTED)


def _difficulty(**overrides) -> Difficulty:
    fields = dict(
        name="test",
        population=100,
        budget=10_000,
        income=500,
        police=0,
        initially_infected=1,
        basic_interaction_rate=0.1,
        max_interaction_variance=0.0,
    )
    fields.update(overrides)
    return Difficulty(**fields)


def _all_infected(sim: Simulation) -> None:
    for idx in range(len(sim.store)):
        sim.store.set_health_state(idx, H.INFECTED)


MUTUAL_DEATH = [TransitionRule(H.INFECTED, H.INFECTED, H.DECEASED, H.DECEASED)]


# --- Setup ---

def test_initial_state_from_difficulty():
    sim = Simulation(_difficulty(police=5, initially_infected=3), seed=1)
    assert len(sim.store) == 100
    assert sim.store.count_role(Role.POLICE) == 5
    assert sim.store.count_state(H.UNKNOWINGLY_INFECTED) == 3
    assert sim.economy.nbr_police == 5
    assert sim.budget == 10_000
    assert sim.income == 500
    assert sim.rules == tuple(default_rules())
    assert sim.tick_number == 0


def test_seed_is_reported():
    assert Simulation(_difficulty(), seed=99).seed == 99
    assert isinstance(Simulation(_difficulty()).seed, int)


def test_same_seed_is_deterministic():
    a = Simulation(_difficulty(initially_infected=5), seed=42)
    b = Simulation(_difficulty(initially_infected=5), seed=42)
    for _ in range(20):
        a.tick()
        b.tick()
    assert [x.state for x in a.store] == [y.state for y in b.store]


def test_seed_infections_rejects_too_many():
    sim = Simulation(_difficulty(population=10, initially_infected=0), seed=0)
    with pytest.raises(ValueError, match="only 10 are healthy"):
        sim.seed_infections(11)


def test_seed_infections_rejects_negative_count():
    sim = Simulation(_difficulty(initially_infected=0), seed=0)
    with pytest.raises(ValueError, match="count must be >= 0"):
        sim.seed_infections(-1)
    assert sim.store.count_state(H.UNKNOWINGLY_INFECTED) == 0


def test_seed_infections_can_fill_population():
    sim = Simulation(_difficulty(population=10, initially_infected=10), seed=0)
    assert sim.store.count_state(H.UNKNOWINGLY_INFECTED) == 10


def test_custom_rules_replace_defaults():
    sim = Simulation(_difficulty(), seed=0, rules=MUTUAL_DEATH)
    assert sim.rules == tuple(MUTUAL_DEATH)


# --- Interaction count ---

def test_interaction_count_floors():
    assert interaction_count(0.1, 100) == 10
    assert interaction_count(0.15, 10) == 1


def test_interaction_count_never_negative():
    assert interaction_count(-0.04, 100) == 0
    assert interaction_count(-1.0, 1) == 0
    assert interaction_count(0.5, 0) == 0


def test_interaction_rate_redrawn_each_call():
    sim = Simulation(_difficulty(basic_interaction_rate=0.5,
                                 max_interaction_variance=0.25), seed=3)
    rates = {sim.interaction_rate() for _ in range(100)}
    assert rates == {0.25, 0.75}


def test_negative_rate_performs_no_interactions():
    sim = Simulation(_difficulty(basic_interaction_rate=0.01,
                                 max_interaction_variance=0.05), seed=5)
    for _ in range(30):
        assert sim.tick() >= 0


# --- Tick ---

def test_reference_scenario():
    sim = Simulation(_difficulty(), seed=11)
    carriers_before = sim.store.count_by(lambda a: a.state in CARRIERS)
    budget_before = sim.budget

    performed = sim.tick()

    assert performed == 10
    assert sim.store.count_by(lambda a: a.state in CARRIERS) >= carriers_before
    assert sim.budget == budget_before + 500
    assert sim.tick_number == 1


def test_infections_never_decrease_without_intervention():
    sim = Simulation(_difficulty(basic_interaction_rate=0.5), seed=8)
    previous = sim.store.count_by(lambda a: a.state in CARRIERS)
    for _ in range(25):
        sim.tick()
        current = sim.store.count_by(lambda a: a.state in CARRIERS)
        assert current >= previous
        previous = current


def test_income_accrues_once_per_tick_even_without_interactions():
    sim = Simulation(_difficulty(basic_interaction_rate=0.0), seed=0)
    sim.tick()
    sim.tick()
    assert sim.tick() == 0
    assert sim.budget == 10_000 + 3 * 500


def test_deceased_agents_are_removed():
    sim = Simulation(_difficulty(population=20, basic_interaction_rate=0.5),
                     seed=2, rules=MUTUAL_DEATH)
    _all_infected(sim)
    assert sim.tick() == 10
    assert len(sim.store) == 0
    assert sim.economy.population == 0
    assert sim.economy.deceased == 20
    assert sim.store.count_state(H.DECEASED) == 0


def test_both_agents_die_in_one_interaction():
    sim = Simulation(_difficulty(population=10, basic_interaction_rate=0.1),
                     seed=4, rules=MUTUAL_DEATH)
    _all_infected(sim)
    survivors_before = list(sim.store)
    sim.tick()
    assert len(sim.store) == 8
    assert sim.economy.deceased == 2
    remaining = list(sim.store)
    assert all(any(a is b for b in survivors_before) for a in remaining)


def test_single_death_rule_removes_only_the_dead():
    sim = Simulation(_difficulty(population=10, basic_interaction_rate=0.1),
                     seed=4)
    _all_infected(sim)
    sim.tick()
    assert len(sim.store) == 9
    assert sim.store.count_state(H.INFECTED) == 9
    assert sim.economy.infected == 9
    assert sim.infected == 9 * 50


def test_shrinking_population_stops_sampling():
    sim = Simulation(_difficulty(population=4, initially_infected=0,
                                 basic_interaction_rate=1.0),
                     seed=0, rules=MUTUAL_DEATH)
    _all_infected(sim)
    assert sim.tick() == 2
    assert len(sim.store) == 0
    assert sim.tick() == 0
    assert sim.budget == 10_000 + 2 * 500


def test_privileged_deaths_update_role_counters():
    sim = Simulation(_difficulty(population=10, police=2, initially_infected=0,
                                 basic_interaction_rate=0.5),
                     seed=6, rules=MUTUAL_DEATH)
    _all_infected(sim)
    sim.tick()
    assert sim.economy.nbr_police == 0
    assert sim.economy.population == 0
    assert sim.economy.nbr_police + sim.economy.nbr_health_workers <= sim.economy.population


def test_on_death_called_per_removed_agent():
    dead = []
    sim = Simulation(_difficulty(population=6, initially_infected=0,
                                 basic_interaction_rate=0.5),
                     seed=1, rules=MUTUAL_DEATH,
                     on_death=lambda s, agent: dead.append(agent))
    _all_infected(sim)
    sim.tick()
    assert len(dead) == 6
    assert all(agent.state is H.DECEASED for agent in dead)


# --- Read accessors ---

def test_scaled_accessors():
    sim = Simulation(_difficulty(police=4), seed=0)
    assert sim.population == 100 * 50
    assert sim.police == 4 * 50
    assert sim.health_workers == 0
    assert sim.deceased == 0


def test_snapshot_reflects_end_of_tick():
    sim = Simulation(_difficulty(), seed=0)
    sim.tick()
    snap = sim.snapshot()
    assert snap.tick == 1
    assert snap.budget == sim.budget
    assert snap.population == sim.population
    assert snap.rule_count == 3
