from __future__ import annotations

from typing import Callable, Dict, Iterator, List, Optional, Tuple

from towersim.aircraft.aircraft import Aircraft


LOADING_HEADER = "LoadingAircraft"


class LoadingRegistry:
	"""Ticks remaining for each aircraft loading at a gate, iterated in callsign order."""

	def __init__(self, release_gate: Optional[Callable[[Aircraft], None]] = None) -> None:
		self.release_gate = release_gate
		self._entries: Dict[str, Tuple[Aircraft, int]] = {}

	def register(self, aircraft: Aircraft, ticks: Optional[int] = None) -> None:
		if aircraft.callsign in self._entries:
			return
		self._entries[aircraft.callsign] = (aircraft, aircraft.loading_time if ticks is None else ticks)

	def tick(self) -> List[Aircraft]:
		finished: List[Aircraft] = []
		for callsign in sorted(self._entries):
			aircraft, remaining = self._entries[callsign]
			remaining -= 1
			if remaining <= 0:
				del self._entries[callsign]
				if self.release_gate is not None:
					self.release_gate(aircraft)
				aircraft.tasks.move_to_next_task()
				finished.append(aircraft)
			else:
				self._entries[callsign] = (aircraft, remaining)
		return finished

	def remaining(self, aircraft: Aircraft) -> Optional[int]:
		entry = self._entries.get(aircraft.callsign)
		return entry[1] if entry else None

	def items(self) -> List[Tuple[Aircraft, int]]:
		return [self._entries[callsign] for callsign in sorted(self._entries)]

	def __contains__(self, aircraft: object) -> bool:
		return isinstance(aircraft, Aircraft) and aircraft.callsign in self._entries

	def __iter__(self) -> Iterator[Aircraft]:
		return iter([aircraft for aircraft, _ in self.items()])

	def __len__(self) -> int:
		return len(self._entries)

	def encode(self) -> str:
		header = f"{LOADING_HEADER}:{len(self._entries)}"
		if not self._entries:
			return header
		return header + "\n" + ",".join(f"{a.callsign}:{ticks}" for a, ticks in self.items())
