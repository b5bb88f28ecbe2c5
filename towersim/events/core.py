from __future__ import annotations

from dataclasses import dataclass
from typing import List, Dict, Callable, Any


AIRCRAFT_LANDED = "aircraft.landed"
AIRCRAFT_DEPARTED = "aircraft.departed"
LOADING_COMPLETED = "loading.completed"
TOWER_TICKED = "tower.ticked"


@dataclass
class Event:
	type: str
	payload: Dict[str, Any]
	tick: int


class EventBus:
	def __init__(self) -> None:
		self.subscribers: Dict[str, List[Callable[[Event], None]]] = {}
		self.log: List[Event] = []

	def subscribe(self, event_type: str, handler: Callable[[Event], None]) -> None:
		self.subscribers.setdefault(event_type, []).append(handler)

	def publish(self, evt: Event) -> None:
		self.log.append(evt)
		for handler in self.subscribers.get(evt.type, []):
			handler(evt)

	def count(self, event_type: str) -> int:
		return sum(1 for evt in self.log if evt.type == event_type)
