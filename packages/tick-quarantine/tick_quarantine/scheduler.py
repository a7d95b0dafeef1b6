"""TimeController - drives a Simulation and notifies observers of each tick."""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable

from tick_quarantine.economy import StatsSnapshot

if TYPE_CHECKING:
    from tick_quarantine.simulation import Simulation


@dataclass(frozen=True, slots=True)
class TickReport:
    """What one simulation tick produced, handed to every observer.

    Attributes:
        tick_number: The simulation's tick counter after the tick.
        interactions: Pairwise interactions performed during the tick.
        stats: End-of-tick statistics.
        stop: Call to end ``run()`` after the current tick.
    """

    tick_number: int
    interactions: int
    stats: StatsSnapshot
    stop: Callable[[], None]


Observer = Callable[[TickReport], None]


class TimeController:
    """Ticks the simulation, then notifies observers in subscription order.

    The simulation always runs before any observer, so observers only see
    finished ticks.
    """

    def __init__(self, simulation: Simulation) -> None:
        self._simulation = simulation
        self._observers: list[Observer] = []
        self._stop_requested: bool = False

    @property
    def simulation(self) -> Simulation:
        return self._simulation

    def subscribe(self, observer: Observer) -> None:
        self._observers.append(observer)

    def unsubscribe(self, observer: Observer) -> None:
        try:
            self._observers.remove(observer)
        except ValueError:
            pass

    def _request_stop(self) -> None:
        self._stop_requested = True

    def notify(self) -> TickReport:
        """Advance the simulation by one tick and dispatch the report."""
        sim = self._simulation
        interactions = sim.tick()
        report = TickReport(
            tick_number=sim.tick_number,
            interactions=interactions,
            stats=sim.snapshot(),
            stop=self._request_stop,
        )
        for observer in list(self._observers):
            observer(report)
        return report

    def run(self, n: int) -> int:
        """Run up to *n* ticks. Returns the number of ticks run."""
        if n < 0:
            raise ValueError(f"n must be >= 0, got {n}")
        self._stop_requested = False
        ran = 0
        while ran < n and not self._stop_requested:
            self.notify()
            ran += 1
        return ran
