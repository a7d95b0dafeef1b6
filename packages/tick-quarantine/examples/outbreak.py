"""Demo scenario - headless outbreak with scheduled upgrades.

Drives a Simulation from a TimeController and prints one line per tick.
Police are bought on the first tick; the cure is introduced at --cure-at,
after which health workers start immunising the agents they meet.

Run: python -m examples.outbreak --difficulty normal --ticks 50
"""
from __future__ import annotations

import argparse

from tick_quarantine import HealthState, Simulation, TickReport, TimeController, preset

POLICE_PRICE = 150_000
CURE_PRICE = 500_000
CURE_WORKERS = 20
_CARRIERS = {HealthState.INFECTED, HealthState.UNKNOWINGLY_INFECTED}


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Outbreak - headless tick-quarantine demo")
    p.add_argument("--difficulty", default="normal", help="Preset name (default: normal)")
    p.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    p.add_argument("--ticks", type=int, default=30, help="Ticks to simulate (default: 30)")
    p.add_argument("--police", type=int, default=10, help="Officers bought on tick 1 (default: 10)")
    p.add_argument("--cure-at", type=int, default=10,
                   help="Tick at which the cure is introduced (default: 10)")
    return p.parse_args()


def main() -> None:
    args = parse_args()
    sim = Simulation(preset(args.difficulty), seed=args.seed)
    timer = TimeController(sim)

    def upgrades(report: TickReport) -> None:
        if report.tick_number == 1 and args.police > 0:
            ok = sim.buy_police_officers(POLICE_PRICE, args.police)
            print(f"  buy {args.police} police: {'ok' if ok else 'rejected'}")
        if report.tick_number == args.cure_at:
            ok = sim.introduce_cure(CURE_PRICE, CURE_WORKERS)
            print(f"  introduce cure: {'ok' if ok else 'rejected'}")

    def show(report: TickReport) -> None:
        snap = report.stats
        print(
            f"tick {snap.tick:4d}  interactions={report.interactions:>5}  "
            f"pop={snap.population:>9,}  "
            f"dead={snap.deceased:>7,}  infected={snap.infected:>7,}  "
            f"budget={snap.budget:>12,.0f}  rules={snap.rule_count}"
        )
        if sim.store.count_by(lambda a: a.state in _CARRIERS) == 0:
            print("Outbreak contained.")
            report.stop()

    timer.subscribe(show)
    timer.subscribe(upgrades)

    print(f"Difficulty {sim.difficulty.name!r}, seed {sim.seed}")
    timer.run(args.ticks)


if __name__ == "__main__":
    main()
