from towersim.alerting.alerts import AlertAgent
from towersim.config import Config
from towersim.control.tower import ControlTower
from towersim.ground.gate import Gate
from towersim.ground.terminal import AirplaneTerminal
from towersim.ingestion.scenario import ScenarioGenerator
from towersim.orchestrator.sim import Simulation


def test_simulation_runs():
	cfg = Config(num_aircraft=12, gates_per_terminal=2, num_ticks=30)
	sim = Simulation(cfg)
	metrics = sim.run()
	assert sim.tower.ticks_elapsed == cfg.num_ticks
	assert len(metrics.timeline) == cfg.num_ticks
	assert list(metrics.timeline["tick"]) == list(range(1, cfg.num_ticks + 1))
	assert metrics.landings > 0
	assert metrics.summary()["events"] == len(metrics.logs)
	assert metrics.timeline["parked"].max() <= 3 * cfg.gates_per_terminal


def test_simulation_accumulates_across_runs():
	sim = Simulation(Config(num_aircraft=6))
	sim.run(num_ticks=4)
	sim.run(num_ticks=6)
	assert sim.tower.ticks_elapsed == 10
	assert len(sim.metrics.timeline) == 10


def test_scenario_is_reproducible():
	cfg = Config(num_aircraft=10, seed=3)
	first = ScenarioGenerator(cfg).build()
	second = ScenarioGenerator(cfg).build()
	assert [a.encode() for a in first.aircraft] == [a.encode() for a in second.aircraft]
	assert len(first.terminals) == cfg.num_airplane_terminals + cfg.num_helicopter_terminals
	assert all(len(t.gates) == cfg.gates_per_terminal for t in first.terminals)


def test_alerts_for_holding_aircraft_and_closed_terminals(make_passenger, make_freight):
	emergency = make_passenger("EMG001")
	emergency.declare_emergency()
	low_fuel = make_freight("LOW001", fuel_ratio=0.1)
	fine = make_freight("FRT001")
	tower = ControlTower()
	terminal = AirplaneTerminal(1)
	terminal.add_gate(Gate(1))
	terminal.declare_emergency()
	tower.add_terminal(terminal)
	for a in (fine, low_fuel, emergency):
		tower.add_aircraft(a)

	alerts = AlertAgent(Config()).generate(tower)
	assert [a.type for a in alerts] == ["EMERGENCY_HOLDING", "FUEL_CRITICAL", "TERMINAL_EMERGENCY"]
	assert alerts[1].meta == {"callsign": "LOW001", "fuel_percent": "10"}
