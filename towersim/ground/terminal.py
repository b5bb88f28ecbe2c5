from __future__ import annotations

from typing import List

from towersim.aircraft.characteristics import AircraftType
from towersim.ground.gate import Gate
from towersim.utils.errors import NoSpaceError, NoSuitableGateError
from towersim.utils.rounding import round_half_up


class Terminal:
	"""A group of gates serving one class of aircraft."""

	MAX_NUM_GATES = 6
	serves: AircraftType

	def __init__(self, terminal_number: int) -> None:
		self.terminal_number = terminal_number
		self.gates: List[Gate] = []
		self.emergency = False

	def add_gate(self, gate: Gate) -> None:
		if len(self.gates) >= self.MAX_NUM_GATES:
			raise NoSpaceError(f"Terminal {self.terminal_number} already has {self.MAX_NUM_GATES} gates")
		self.gates.append(gate)

	def find_unoccupied_gate(self) -> Gate:
		for gate in self.gates:
			if not gate.is_occupied():
				return gate
		raise NoSuitableGateError(f"All gates in terminal {self.terminal_number} are occupied")

	def accepts(self, aircraft_type: AircraftType) -> bool:
		return not self.emergency and aircraft_type == self.serves

	def declare_emergency(self) -> None:
		self.emergency = True

	def clear_emergency(self) -> None:
		self.emergency = False

	def has_emergency(self) -> bool:
		return self.emergency

	def calculate_occupancy_level(self) -> int:
		if not self.gates:
			return 0
		occupied = sum(1 for gate in self.gates if gate.is_occupied())
		return round_half_up(occupied * 100 / len(self.gates))

	def __str__(self) -> str:
		suffix = " (EMERGENCY)" if self.emergency else ""
		return f"{type(self).__name__} {self.terminal_number}, {len(self.gates)} gates{suffix}"

	def encode(self) -> str:
		header = f"{type(self).__name__}:{self.terminal_number}:{'true' if self.emergency else 'false'}:{len(self.gates)}"
		return "\n".join([header] + [gate.encode() for gate in self.gates])


class AirplaneTerminal(Terminal):
	serves = AircraftType.AIRPLANE


class HelicopterTerminal(Terminal):
	serves = AircraftType.HELICOPTER


TERMINAL_CLASSES = {cls.__name__: cls for cls in (AirplaneTerminal, HelicopterTerminal)}
