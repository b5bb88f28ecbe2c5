from __future__ import annotations

from typing import List, Optional

import numpy as np

from towersim.aircraft.aircraft import Aircraft, build_aircraft
from towersim.aircraft.characteristics import AircraftCharacteristics
from towersim.config import Config
from towersim.control.tower import ControlTower
from towersim.events.core import EventBus
from towersim.ground.gate import Gate
from towersim.ground.terminal import AirplaneTerminal, HelicopterTerminal, Terminal
from towersim.tasks.task import Task, TaskList, TaskType


LOAD_PERCENTS = [25, 50, 75, 100]


class ScenarioGenerator:
	"""Builds a reproducible random tower from a Config."""

	def __init__(self, config: Config) -> None:
		self.config = config

	def build(self, bus: Optional[EventBus] = None) -> ControlTower:
		np.random.seed(self.config.seed)
		tower = ControlTower(bus=bus)
		for terminal in self._terminals():
			tower.add_terminal(terminal)
		for aircraft in self._aircraft():
			tower.add_aircraft(aircraft)
		return tower

	def _terminals(self) -> List[Terminal]:
		terminals: List[Terminal] = []
		kinds = [AirplaneTerminal] * self.config.num_airplane_terminals + [HelicopterTerminal] * self.config.num_helicopter_terminals
		gate_number = 1
		for number, kind in enumerate(kinds, start=1):
			terminal = kind(number)
			for _ in range(min(self.config.gates_per_terminal, Terminal.MAX_NUM_GATES)):
				terminal.add_gate(Gate(gate_number))
				gate_number += 1
			terminals.append(terminal)
		return terminals

	def _task_list(self) -> TaskList:
		tasks = [Task(TaskType.AWAY)] * int(np.random.randint(1, 4))
		tasks.append(Task(TaskType.LAND))
		tasks += [Task(TaskType.WAIT)] * int(np.random.randint(0, 3))
		tasks.append(Task(TaskType.LOAD, int(np.random.choice(LOAD_PERCENTS))))
		tasks.append(Task(TaskType.TAKEOFF))
		task_list = TaskList(tasks)
		# arriving aircraft start either still away or already waiting to land
		if np.random.rand() < 0.5:
			while task_list.current_task().type != TaskType.LAND:
				task_list.move_to_next_task()
		return task_list

	def _aircraft(self) -> List[Aircraft]:
		kinds = list(AircraftCharacteristics)
		choices = np.random.choice(len(kinds), size=self.config.num_aircraft)
		fuel_ratios = np.random.uniform(0.15, 1.0, size=self.config.num_aircraft)
		emergencies = np.random.binomial(1, 0.1, size=self.config.num_aircraft)
		result: List[Aircraft] = []
		for i in range(self.config.num_aircraft):
			characteristics = kinds[int(choices[i])]
			fuel = round(characteristics.fuel_capacity * float(fuel_ratios[i]), 2)
			cargo = int(np.random.randint(0, characteristics.cargo_capacity + 1))
			aircraft = build_aircraft(f"TWR{100 + i}", characteristics, self._task_list(), fuel, cargo)
			if emergencies[i]:
				aircraft.declare_emergency()
			result.append(aircraft)
		return result
