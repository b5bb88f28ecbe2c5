from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from towersim.aircraft.aircraft import Aircraft
from towersim.control.loading import LoadingRegistry
from towersim.control.queues import LandingQueue, TakeoffQueue
from towersim.events.core import AIRCRAFT_DEPARTED, AIRCRAFT_LANDED, LOADING_COMPLETED, TOWER_TICKED, Event, EventBus
from towersim.ground.gate import Gate
from towersim.ground.terminal import Terminal
from towersim.tasks.task import TaskType
from towersim.utils.errors import NoSuitableGateError
from towersim.utils.logging import get_logger


logger = get_logger(__name__)


class ControlTower:
	"""Airport control tower: owns the aircraft, terminals, runway queues and loading registry.

	Each ``tick()`` runs these steps in order:

	1. every aircraft ticks, and those on AWAY or WAIT move on to their next task;
	2. the loading registry counts down, releasing gates of aircraft that finished loading;
	3. the runway is used: even ticks try a landing first and fall back to a takeoff,
	   odd ticks only try a takeoff;
	4. every aircraft is filed into the queue or registry matching its current task.
	"""

	def __init__(
		self,
		ticks_elapsed: int = 0,
		aircraft: Optional[Iterable[Aircraft]] = None,
		landing_queue: Optional[LandingQueue] = None,
		takeoff_queue: Optional[TakeoffQueue] = None,
		loading_aircraft: Optional[Dict[Aircraft, int]] = None,
		bus: Optional[EventBus] = None,
	) -> None:
		self.ticks_elapsed = ticks_elapsed
		self._aircraft: List[Aircraft] = list(aircraft or [])
		self._terminals: List[Terminal] = []
		self.landing_queue = landing_queue if landing_queue is not None else LandingQueue()
		self.takeoff_queue = takeoff_queue if takeoff_queue is not None else TakeoffQueue()
		self.loading = LoadingRegistry(release_gate=self._release_gate)
		for loading, ticks in (loading_aircraft or {}).items():
			self.loading.register(loading, ticks)
		self.bus = bus

	@property
	def aircraft(self) -> List[Aircraft]:
		return list(self._aircraft)

	@property
	def terminals(self) -> List[Terminal]:
		return list(self._terminals)

	@staticmethod
	def prefers_landing(tick: int) -> bool:
		return tick % 2 == 0

	@property
	def landing_preferred(self) -> bool:
		return self.prefers_landing(self.ticks_elapsed)

	def add_terminal(self, terminal: Terminal) -> None:
		self._terminals.append(terminal)

	def add_aircraft(self, aircraft: Aircraft) -> None:
		"""Bring an aircraft under the tower's control.

		Aircraft already on the ground (WAIT or LOAD) are parked at a free gate first;
		``NoSuitableGateError`` propagates if there is none.
		"""
		if aircraft.tasks.current_task().type in (TaskType.WAIT, TaskType.LOAD):
			self.find_unoccupied_gate(aircraft).park_aircraft(aircraft)
		self._aircraft.append(aircraft)
		self.place_aircraft_in_queues(aircraft)

	def find_unoccupied_gate(self, aircraft: Aircraft) -> Gate:
		aircraft_type = aircraft.characteristics.type
		for terminal in self._terminals:
			if not terminal.accepts(aircraft_type):
				continue
			try:
				return terminal.find_unoccupied_gate()
			except NoSuitableGateError:
				continue
		raise NoSuitableGateError(f"No gate available for aircraft {aircraft.callsign}")

	def find_gate_of_aircraft(self, aircraft: Aircraft) -> Optional[Gate]:
		for terminal in self._terminals:
			for gate in terminal.gates:
				if gate.aircraft_at_gate is aircraft:
					return gate
		return None

	def _release_gate(self, aircraft: Aircraft) -> None:
		gate = self.find_gate_of_aircraft(aircraft)
		if gate is None:
			logger.warning("Aircraft %s finished loading but is not parked at any gate", aircraft.callsign)
		else:
			gate.aircraft_leaves()
		logger.debug("%s finished loading", aircraft.callsign)
		self._publish(LOADING_COMPLETED, {"callsign": aircraft.callsign})

	def tick(self) -> None:
		self.ticks_elapsed += 1

		for aircraft in self._aircraft:
			aircraft.tick()
			if aircraft.tasks.current_task().type in (TaskType.AWAY, TaskType.WAIT):
				aircraft.tasks.move_to_next_task()

		self.loading.tick()

		if self.landing_preferred:
			if not self.try_land_aircraft():
				self.try_take_off_aircraft()
		else:
			self.try_take_off_aircraft()

		self.place_all_aircraft_in_queues()
		self._publish(TOWER_TICKED, {
			"landing_queue": len(self.landing_queue),
			"takeoff_queue": len(self.takeoff_queue),
			"loading": len(self.loading),
		})

	def try_land_aircraft(self) -> bool:
		aircraft = self.landing_queue.peek_aircraft()
		if aircraft is None:
			return False
		try:
			gate = self.find_unoccupied_gate(aircraft)
		except NoSuitableGateError:
			logger.debug("%s holding: no gate available", aircraft.callsign)
			return False
		self.landing_queue.remove_aircraft()
		gate.park_aircraft(aircraft)
		aircraft.unload()
		aircraft.tasks.move_to_next_task()
		logger.debug("%s landed, parked at gate %d", aircraft.callsign, gate.gate_number)
		self._publish(AIRCRAFT_LANDED, {"callsign": aircraft.callsign, "gate": gate.gate_number})
		return True

	def try_take_off_aircraft(self) -> bool:
		aircraft = self.takeoff_queue.remove_aircraft()
		if aircraft is None:
			return False
		aircraft.tasks.move_to_next_task()
		logger.debug("%s departed", aircraft.callsign)
		self._publish(AIRCRAFT_DEPARTED, {"callsign": aircraft.callsign})
		return True

	def place_all_aircraft_in_queues(self) -> None:
		for aircraft in self._aircraft:
			self.place_aircraft_in_queues(aircraft)

	def place_aircraft_in_queues(self, aircraft: Aircraft) -> None:
		task_type = aircraft.tasks.current_task().type
		if task_type == TaskType.LAND and not self.landing_queue.contains_aircraft(aircraft):
			self.landing_queue.add_aircraft(aircraft)
		elif task_type == TaskType.TAKEOFF and not self.takeoff_queue.contains_aircraft(aircraft):
			self.takeoff_queue.add_aircraft(aircraft)
		elif task_type == TaskType.LOAD and aircraft not in self.loading:
			self.loading.register(aircraft)

	def _publish(self, event_type: str, payload: Dict[str, object]) -> None:
		if self.bus is not None:
			self.bus.publish(Event(event_type, payload, self.ticks_elapsed))

	def __str__(self) -> str:
		return (
			f"ControlTower: {len(self._terminals)} terminals, {len(self._aircraft)} total aircraft "
			f"({len(self.landing_queue)} LAND, {len(self.takeoff_queue)} TAKEOFF, {len(self.loading)} LOAD)"
		)
