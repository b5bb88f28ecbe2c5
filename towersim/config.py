from dataclasses import dataclass


@dataclass
class Config:
	# Scenario sizes
	num_aircraft: int = 8
	num_airplane_terminals: int = 2
	num_helicopter_terminals: int = 1
	gates_per_terminal: int = 3
	seed: int = 42

	# Number of ticks a simulation run advances the tower
	num_ticks: int = 20

	# Alerting threshold (percent of fuel capacity)
	critical_fuel_percent: int = 20

	# Save file names inside a save directory
	tick_file: str = "tick.txt"
	aircraft_file: str = "aircraft.txt"
	queues_file: str = "queues.txt"
	terminals_file: str = "terminalsWithGates.txt"
