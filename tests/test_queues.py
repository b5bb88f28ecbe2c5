from towersim.aircraft.aircraft import PassengerAircraft
from towersim.aircraft.characteristics import AircraftCharacteristics
from towersim.control.queues import LandingQueue, TakeoffQueue

from conftest import landing_cycle


def test_takeoff_queue_is_first_in_first_out(make_passenger, make_freight):
	queue = TakeoffQueue()
	aircraft = [make_freight("FRT001"), make_passenger("PAX001"), make_freight("FRT002", fuel_ratio=0.05)]
	for a in aircraft:
		queue.add_aircraft(a)
	aircraft[2].declare_emergency()
	assert queue.peek_aircraft() is aircraft[0]
	assert [queue.remove_aircraft() for _ in range(3)] == aircraft
	assert queue.remove_aircraft() is None
	assert queue.peek_aircraft() is None


def test_add_none_is_ignored():
	queue = TakeoffQueue()
	queue.add_aircraft(None)
	assert len(queue) == 0
	assert queue.aircraft_in_order() == []


def _tiers(make_passenger, make_freight):
	emergency = make_freight("EMG001")
	emergency.declare_emergency()
	low_fuel = make_freight("LOW001", fuel_ratio=0.1)
	passenger = make_passenger("PAX001")
	plain = make_freight("FRT001")
	return emergency, low_fuel, passenger, plain


def test_landing_queue_priority_order(make_passenger, make_freight):
	emergency, low_fuel, passenger, plain = _tiers(make_passenger, make_freight)
	queue = LandingQueue()
	for a in (emergency, low_fuel, passenger, plain):
		queue.add_aircraft(a)
	assert [queue.remove_aircraft() for _ in range(4)] == [emergency, low_fuel, passenger, plain]


def test_landing_queue_priority_ignores_insertion_order(make_passenger, make_freight):
	emergency, low_fuel, passenger, plain = _tiers(make_passenger, make_freight)
	queue = LandingQueue()
	for a in (plain, passenger, low_fuel, emergency):
		queue.add_aircraft(a)
	assert queue.aircraft_in_order() == [emergency, low_fuel, passenger, plain]


def test_landing_queue_ties_go_to_earliest_inserted(make_passenger, make_freight):
	first = make_passenger("PAX001", fuel_ratio=0.2)
	second = make_passenger("PAX002", fuel_ratio=0.15)
	freight_a = make_freight("FRT001")
	freight_b = make_freight("FRT002")
	queue = LandingQueue()
	for a in (freight_a, freight_b, first, second):
		queue.add_aircraft(a)
	assert queue.aircraft_in_order() == [first, second, freight_a, freight_b]


def test_landing_priority_is_reevaluated_on_every_call(make_passenger, make_freight):
	passenger = make_passenger("PAX001")
	freight = make_freight("FRT001")
	queue = LandingQueue()
	queue.add_aircraft(passenger)
	queue.add_aircraft(freight)
	assert queue.peek_aircraft() is passenger
	freight.fuel_amount = AircraftCharacteristics.BOEING_747_8F.fuel_capacity * 0.18
	assert queue.peek_aircraft() is freight
	freight.fuel_amount = AircraftCharacteristics.BOEING_747_8F.fuel_capacity
	passenger.declare_emergency()
	freight.declare_emergency()
	assert queue.remove_aircraft() is passenger


def test_snapshot_does_not_mutate_queue(make_passenger, make_freight):
	emergency, low_fuel, passenger, plain = _tiers(make_passenger, make_freight)
	queue = LandingQueue()
	for a in (plain, passenger, low_fuel, emergency):
		queue.add_aircraft(a)
	first = queue.aircraft_in_order()
	second = queue.aircraft_in_order()
	assert first == second
	first.clear()
	assert len(queue) == 4
	assert all(queue.contains_aircraft(a) for a in (emergency, low_fuel, passenger, plain))
	assert queue.remove_aircraft() is emergency


def test_contains_and_encode(make_passenger, make_freight):
	queue = TakeoffQueue()
	a = make_passenger("ABC123")
	b = make_freight("XYZ987")
	assert queue.encode() == "TakeoffQueue:0"
	queue.add_aircraft(a)
	queue.add_aircraft(b)
	assert queue.contains_aircraft(a)
	assert not queue.contains_aircraft(make_passenger("ABC124"))
	assert str(queue) == "TakeoffQueue [ABC123, XYZ987]"
	assert queue.encode() == "TakeoffQueue:2\nABC123,XYZ987"


def test_half_percent_above_critical_fuel_is_not_prioritised(make_passenger):
	plain = make_passenger("PAX001")
	# 5576 of 27200 is 20.5%, reported as 21
	almost_critical = PassengerAircraft("PAX002", AircraftCharacteristics.AIRBUS_A320, landing_cycle(), 5576, 0)
	queue = LandingQueue()
	queue.add_aircraft(plain)
	queue.add_aircraft(almost_critical)
	assert queue.peek_aircraft() is plain
