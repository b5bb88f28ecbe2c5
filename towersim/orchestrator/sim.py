from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Any, Optional

import pandas as pd

from towersim.config import Config
from towersim.control.tower import ControlTower
from towersim.events.core import AIRCRAFT_DEPARTED, AIRCRAFT_LANDED, LOADING_COMPLETED, EventBus
from towersim.ingestion.scenario import ScenarioGenerator
from towersim.utils.logging import get_logger


logger = get_logger(__name__)


@dataclass
class SimulationMetrics:
	landings: int = 0
	departures: int = 0
	loads_completed: int = 0
	timeline: pd.DataFrame = field(default_factory=pd.DataFrame)
	logs: List[Dict[str, Any]] = field(default_factory=list)

	def summary(self) -> Dict[str, Any]:
		return {
			"landings": self.landings,
			"departures": self.departures,
			"loads_completed": self.loads_completed,
			"events": len(self.logs),
		}


class Simulation:
	def __init__(self, config: Config, tower: Optional[ControlTower] = None) -> None:
		self.config = config
		self.bus = EventBus()
		if tower is None:
			tower = ScenarioGenerator(config).build(bus=self.bus)
		else:
			tower.bus = self.bus
		self.tower = tower
		self.metrics = SimulationMetrics()

	def snapshot(self) -> Dict[str, Any]:
		parked = sum(1 for t in self.tower.terminals for g in t.gates if g.is_occupied())
		return {
			"tick": self.tower.ticks_elapsed,
			"landing_queue": len(self.tower.landing_queue),
			"takeoff_queue": len(self.tower.takeoff_queue),
			"loading": len(self.tower.loading),
			"parked": parked,
			"landing_preferred": self.tower.landing_preferred,
		}

	def run(self, num_ticks: Optional[int] = None) -> SimulationMetrics:
		num_ticks = self.config.num_ticks if num_ticks is None else num_ticks
		logger.info("Running %d ticks from tick %d: %s", num_ticks, self.tower.ticks_elapsed, self.tower)
		start = len(self.bus.log)
		rows = []
		for _ in range(num_ticks):
			self.tower.tick()
			rows.append(self.snapshot())

		new_events = self.bus.log[start:]
		self.metrics.landings += sum(1 for e in new_events if e.type == AIRCRAFT_LANDED)
		self.metrics.departures += sum(1 for e in new_events if e.type == AIRCRAFT_DEPARTED)
		self.metrics.loads_completed += sum(1 for e in new_events if e.type == LOADING_COMPLETED)
		if rows:
			frames = [df for df in (self.metrics.timeline, pd.DataFrame(rows)) if not df.empty]
			self.metrics.timeline = pd.concat(frames, ignore_index=True)
		self.metrics.logs += [{"tick": e.tick, "type": e.type, **e.payload} for e in new_events]
		logger.info("Finished at tick %d | landings=%d departures=%d loads=%d", self.tower.ticks_elapsed, self.metrics.landings, self.metrics.departures, self.metrics.loads_completed)
		return self.metrics
