from __future__ import annotations

from pathlib import Path
from typing import Optional, TextIO

from towersim.config import Config
from towersim.control.tower import ControlTower
from towersim.utils.logging import get_logger


logger = get_logger(__name__)


def encode_aircraft(tower: ControlTower) -> str:
	aircraft = tower.aircraft
	return "\n".join([str(len(aircraft))] + [a.encode() for a in aircraft])


def encode_terminals(tower: ControlTower) -> str:
	terminals = tower.terminals
	return "\n".join([str(len(terminals))] + [t.encode() for t in terminals])


def encode_queues(tower: ControlTower) -> str:
	return "\n".join([
		tower.takeoff_queue.encode(),
		tower.landing_queue.encode(),
		tower.loading.encode(),
	])


def save_tower(tower: ControlTower, tick_out: TextIO, aircraft_out: TextIO, queues_out: TextIO, terminals_out: TextIO) -> None:
	tick_out.write(f"{tower.ticks_elapsed}\n")
	aircraft_out.write(encode_aircraft(tower) + "\n")
	queues_out.write(encode_queues(tower) + "\n")
	terminals_out.write(encode_terminals(tower) + "\n")


def save_to_directory(tower: ControlTower, directory: Path, config: Optional[Config] = None) -> None:
	config = config or Config()
	directory = Path(directory)
	directory.mkdir(parents=True, exist_ok=True)
	with open(directory / config.tick_file, "w") as tick, \
			open(directory / config.aircraft_file, "w") as aircraft, \
			open(directory / config.queues_file, "w") as queues, \
			open(directory / config.terminals_file, "w") as terminals:
		save_tower(tower, tick, aircraft, queues, terminals)
	logger.info("Saved tower at tick %d to %s", tower.ticks_elapsed, directory)
