from __future__ import annotations

from dataclasses import dataclass
from typing import List, Dict

from towersim.config import Config
from towersim.control.tower import ControlTower


@dataclass
class Alert:
	type: str
	message: str
	meta: Dict[str, str]


class AlertAgent:
	def __init__(self, config: Config) -> None:
		self.config = config

	def generate(self, tower: ControlTower) -> List[Alert]:
		alerts: List[Alert] = []
		# Aircraft holding for a landing slot, in the order they will be served
		for position, aircraft in enumerate(tower.landing_queue.aircraft_in_order(), start=1):
			if aircraft.has_emergency():
				alerts.append(Alert(
					type="EMERGENCY_HOLDING",
					message=f"Aircraft {aircraft.callsign} declared an emergency and is holding at position {position}",
					meta={"callsign": aircraft.callsign, "position": str(position)},
				))
			elif aircraft.fuel_percent_remaining <= self.config.critical_fuel_percent:
				alerts.append(Alert(
					type="FUEL_CRITICAL",
					message=f"Aircraft {aircraft.callsign} holding with {aircraft.fuel_percent_remaining}% fuel remaining",
					meta={"callsign": aircraft.callsign, "fuel_percent": str(aircraft.fuel_percent_remaining)},
				))

		for terminal in tower.terminals:
			if terminal.has_emergency():
				alerts.append(Alert(
					type="TERMINAL_EMERGENCY",
					message=f"{type(terminal).__name__} {terminal.terminal_number} is closed to arrivals",
					meta={"terminal": str(terminal.terminal_number)},
				))

		return alerts
