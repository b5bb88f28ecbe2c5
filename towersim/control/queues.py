from __future__ import annotations

from typing import Callable, List, Optional

from towersim.aircraft.aircraft import Aircraft


CRITICAL_FUEL_PERCENT = 20

# Picks the index of the next aircraft to serve from a non-empty list held in insertion order
SelectionPolicy = Callable[[List[Aircraft]], int]


def first_in_first_out(waiting: List[Aircraft]) -> int:
	return 0


def landing_priority(waiting: List[Aircraft]) -> int:
	rules = [
		lambda a: a.has_emergency(),
		lambda a: a.fuel_percent_remaining <= CRITICAL_FUEL_PERCENT,
		lambda a: a.is_passenger,
	]
	for rule in rules:
		for idx, aircraft in enumerate(waiting):
			if rule(aircraft):
				return idx
	return 0


class AircraftQueue:
	"""Aircraft waiting for the runway, served in the order chosen by ``policy``.

	Members are held in insertion order. The policy is consulted on every peek/remove,
	so changes to an aircraft (fuel, emergency) take effect without re-queueing it.
	"""

	def __init__(self, policy: SelectionPolicy) -> None:
		self.policy = policy
		self._waiting: List[Aircraft] = []

	def add_aircraft(self, aircraft: Optional[Aircraft]) -> None:
		if aircraft is not None:
			self._waiting.append(aircraft)

	def peek_aircraft(self) -> Optional[Aircraft]:
		if not self._waiting:
			return None
		return self._waiting[self.policy(self._waiting)]

	def remove_aircraft(self) -> Optional[Aircraft]:
		if not self._waiting:
			return None
		return self._waiting.pop(self.policy(self._waiting))

	def aircraft_in_order(self) -> List[Aircraft]:
		remaining = list(self._waiting)
		ordered: List[Aircraft] = []
		while remaining:
			ordered.append(remaining.pop(self.policy(remaining)))
		return ordered

	def contains_aircraft(self, aircraft: Aircraft) -> bool:
		return any(member is aircraft for member in self._waiting)

	def __len__(self) -> int:
		return len(self._waiting)

	def __str__(self) -> str:
		callsigns = ", ".join(a.callsign for a in self.aircraft_in_order())
		return f"{type(self).__name__} [{callsigns}]"

	def encode(self) -> str:
		ordered = self.aircraft_in_order()
		header = f"{type(self).__name__}:{len(ordered)}"
		if not ordered:
			return header
		return header + "\n" + ",".join(a.callsign for a in ordered)


class TakeoffQueue(AircraftQueue):
	def __init__(self) -> None:
		super().__init__(first_in_first_out)


class LandingQueue(AircraftQueue):
	def __init__(self) -> None:
		super().__init__(landing_priority)
