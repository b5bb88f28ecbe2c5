from __future__ import annotations

import math
from abc import ABC, abstractmethod

from towersim.aircraft.characteristics import AircraftCharacteristics
from towersim.tasks.task import TaskList, TaskType
from towersim.utils.rounding import round_half_up


FUEL_DENSITY = 0.8  # kg per litre
AVG_PASSENGER_WEIGHT = 80  # kg


class Aircraft(ABC):
	"""An aircraft under the tower's jurisdiction.

	The scheduler only relies on the callsign, the task list, fuel percentage, the
	emergency flag, loading time, cargo class, ``unload()`` and ``tick()``.
	"""

	def __init__(self, callsign: str, characteristics: AircraftCharacteristics, tasks: TaskList, fuel_amount: float) -> None:
		if fuel_amount < 0:
			raise ValueError("Amount of fuel onboard cannot be negative")
		if fuel_amount > characteristics.fuel_capacity:
			raise ValueError("Amount of fuel onboard cannot exceed fuel capacity")
		self._callsign = callsign
		self.characteristics = characteristics
		self.tasks = tasks
		self.fuel_amount = float(fuel_amount)
		self.emergency = False

	@property
	def callsign(self) -> str:
		return self._callsign

	@property
	def is_passenger(self) -> bool:
		return False

	@property
	def fuel_percent_remaining(self) -> int:
		return round_half_up(self.fuel_amount * 100 / self.characteristics.fuel_capacity)

	@property
	def total_weight(self) -> float:
		return self.characteristics.empty_weight + self.fuel_amount * FUEL_DENSITY

	def declare_emergency(self) -> None:
		self.emergency = True

	def clear_emergency(self) -> None:
		self.emergency = False

	def has_emergency(self) -> bool:
		return self.emergency

	@property
	@abstractmethod
	def cargo_amount(self) -> int:
		...

	@property
	@abstractmethod
	def loading_time(self) -> int:
		...

	@abstractmethod
	def calculate_occupancy_level(self) -> int:
		...

	@abstractmethod
	def unload(self) -> None:
		...

	def _amount_to_load(self, capacity: int) -> int:
		load_percent = self.tasks.current_task().load_percent
		return round_half_up(capacity * load_percent / 100)

	def tick(self) -> None:
		task_type = self.tasks.current_task().type
		capacity = self.characteristics.fuel_capacity
		if task_type == TaskType.AWAY:
			self.fuel_amount = max(0.0, self.fuel_amount - capacity * 0.1)
		elif task_type == TaskType.LOAD:
			self.fuel_amount = min(capacity, self.fuel_amount + capacity / self.loading_time)

	def __str__(self) -> str:
		suffix = " (EMERGENCY)" if self.emergency else ""
		return f"{self.characteristics.type.value} {self.callsign} {self.characteristics.name} {self.tasks.current_task().type}{suffix}"

	def __repr__(self) -> str:
		return f"{type(self).__name__}({self.callsign!r})"

	def encode(self) -> str:
		return ":".join([
			self.callsign,
			self.characteristics.name,
			self.tasks.encode(),
			f"{self.fuel_amount:.2f}",
			"true" if self.emergency else "false",
			str(self.cargo_amount),
		])


class PassengerAircraft(Aircraft):
	def __init__(self, callsign: str, characteristics: AircraftCharacteristics, tasks: TaskList, fuel_amount: float, num_passengers: int) -> None:
		super().__init__(callsign, characteristics, tasks, fuel_amount)
		if num_passengers < 0:
			raise ValueError("Number of passengers onboard cannot be negative")
		if num_passengers > characteristics.passenger_capacity:
			raise ValueError("Number of passengers onboard cannot exceed capacity")
		self.num_passengers = num_passengers

	@property
	def is_passenger(self) -> bool:
		return True

	@property
	def cargo_amount(self) -> int:
		return self.num_passengers

	@property
	def total_weight(self) -> float:
		return super().total_weight + self.num_passengers * AVG_PASSENGER_WEIGHT

	@property
	def loading_time(self) -> int:
		to_load = self._amount_to_load(self.characteristics.passenger_capacity)
		if to_load <= 0:
			return 1
		return max(1, round_half_up(math.log10(to_load)))

	def calculate_occupancy_level(self) -> int:
		return round_half_up(self.num_passengers * 100 / self.characteristics.passenger_capacity)

	def unload(self) -> None:
		self.num_passengers = 0

	def tick(self) -> None:
		super().tick()
		if self.tasks.current_task().type == TaskType.LOAD:
			boarding = round_half_up(self._amount_to_load(self.characteristics.passenger_capacity) / self.loading_time)
			self.num_passengers = min(self.num_passengers + boarding, self.characteristics.passenger_capacity)


class FreightAircraft(Aircraft):
	def __init__(self, callsign: str, characteristics: AircraftCharacteristics, tasks: TaskList, fuel_amount: float, freight_amount: int) -> None:
		super().__init__(callsign, characteristics, tasks, fuel_amount)
		if freight_amount < 0:
			raise ValueError("Amount of freight onboard cannot be negative")
		if freight_amount > characteristics.freight_capacity:
			raise ValueError("Amount of freight onboard cannot exceed freight capacity")
		self.freight_amount = freight_amount

	@property
	def cargo_amount(self) -> int:
		return self.freight_amount

	@property
	def total_weight(self) -> float:
		return super().total_weight + self.freight_amount

	@property
	def loading_time(self) -> int:
		to_load = self._amount_to_load(self.characteristics.freight_capacity)
		if to_load < 1000:
			return 1
		if to_load <= 50000:
			return 2
		return 3

	def calculate_occupancy_level(self) -> int:
		return round_half_up(self.freight_amount * 100 / self.characteristics.freight_capacity)

	def unload(self) -> None:
		self.freight_amount = 0

	def tick(self) -> None:
		super().tick()
		if self.tasks.current_task().type == TaskType.LOAD:
			loading = round_half_up(self._amount_to_load(self.characteristics.freight_capacity) / self.loading_time)
			self.freight_amount = min(self.freight_amount + loading, self.characteristics.freight_capacity)


def build_aircraft(callsign: str, characteristics: AircraftCharacteristics, tasks: TaskList, fuel_amount: float, cargo_amount: int) -> Aircraft:
	"""Create the aircraft class matching the characteristics' larger cargo capacity."""
	if characteristics.carries_freight:
		return FreightAircraft(callsign, characteristics, tasks, fuel_amount, cargo_amount)
	return PassengerAircraft(callsign, characteristics, tasks, fuel_amount, cargo_amount)
