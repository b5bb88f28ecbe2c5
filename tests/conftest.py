import pytest

from towersim.aircraft.aircraft import FreightAircraft, PassengerAircraft
from towersim.aircraft.characteristics import AircraftCharacteristics
from towersim.tasks.task import Task, TaskList, TaskType


def cycle(*tokens):
	"""Build a TaskList from tokens like "LAND" or "LOAD@60"."""
	tasks = []
	for token in tokens:
		if "@" in token:
			name, pct = token.split("@")
			tasks.append(Task(TaskType[name], int(pct)))
		else:
			tasks.append(Task(TaskType[token]))
	return TaskList(tasks)


def landing_cycle():
	return cycle("LAND", "WAIT", "LOAD@50", "TAKEOFF", "AWAY")


@pytest.fixture
def make_passenger():
	def _make(callsign, fuel_ratio=1.0, tasks=None, passengers=0, characteristics=AircraftCharacteristics.AIRBUS_A320):
		return PassengerAircraft(callsign, characteristics, tasks or landing_cycle(), characteristics.fuel_capacity * fuel_ratio, passengers)
	return _make


@pytest.fixture
def make_freight():
	def _make(callsign, fuel_ratio=0.5, tasks=None, freight=0, characteristics=AircraftCharacteristics.BOEING_747_8F):
		return FreightAircraft(callsign, characteristics, tasks or landing_cycle(), characteristics.fuel_capacity * fuel_ratio, freight)
	return _make
