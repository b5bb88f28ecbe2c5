from __future__ import annotations

from typing import Optional

from towersim.aircraft.aircraft import Aircraft
from towersim.utils.errors import NoSpaceError


EMPTY_GATE = "empty"


class Gate:
	def __init__(self, gate_number: int) -> None:
		self.gate_number = gate_number
		self.aircraft_at_gate: Optional[Aircraft] = None

	def park_aircraft(self, aircraft: Aircraft) -> None:
		if self.is_occupied():
			raise NoSpaceError(f"Gate {self.gate_number} is occupied, cannot park aircraft")
		self.aircraft_at_gate = aircraft

	def aircraft_leaves(self) -> None:
		self.aircraft_at_gate = None

	def is_occupied(self) -> bool:
		return self.aircraft_at_gate is not None

	def __eq__(self, other: object) -> bool:
		if not isinstance(other, Gate):
			return NotImplemented
		return self.gate_number == other.gate_number

	def __hash__(self) -> int:
		return hash(self.gate_number)

	def __str__(self) -> str:
		occupant = self.aircraft_at_gate.callsign if self.aircraft_at_gate else EMPTY_GATE
		return f"Gate {self.gate_number} [{occupant}]"

	def encode(self) -> str:
		occupant = self.aircraft_at_gate.callsign if self.aircraft_at_gate else EMPTY_GATE
		return f"{self.gate_number}:{occupant}"
