from __future__ import annotations

from enum import Enum


class AircraftType(Enum):
	AIRPLANE = "AIRPLANE"
	HELICOPTER = "HELICOPTER"


class AircraftCharacteristics(Enum):
	# type, empty weight (kg), max takeoff weight (kg), passengers, freight (kg), fuel (L)
	AIRBUS_A320 = (AircraftType.AIRPLANE, 42600, 78000, 150, 0, 27200)
	BOEING_747_8F = (AircraftType.AIRPLANE, 197131, 447700, 0, 137756, 226117)
	BOEING_787 = (AircraftType.AIRPLANE, 119950, 227930, 242, 0, 126206)
	FOKKER_100 = (AircraftType.AIRPLANE, 24375, 44450, 97, 0, 13365)
	ROBINSON_R44 = (AircraftType.HELICOPTER, 658, 1088, 4, 0, 190)
	SIKORSKY_SKYCRANE = (AircraftType.HELICOPTER, 8724, 19050, 0, 9100, 3328)

	def __init__(
		self,
		aircraft_type: AircraftType,
		empty_weight: int,
		max_takeoff_weight: int,
		passenger_capacity: int,
		freight_capacity: int,
		fuel_capacity: float,
	) -> None:
		self.type = aircraft_type
		self.empty_weight = empty_weight
		self.max_takeoff_weight = max_takeoff_weight
		self.passenger_capacity = passenger_capacity
		self.freight_capacity = freight_capacity
		self.fuel_capacity = fuel_capacity

	@property
	def carries_freight(self) -> bool:
		return self.freight_capacity >= self.passenger_capacity

	@property
	def cargo_capacity(self) -> int:
		return max(self.passenger_capacity, self.freight_capacity)
