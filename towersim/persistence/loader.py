"""Read a control tower back from its four saved text sections.

Every reader either returns fully built objects or raises ``MalformedPersistedState``;
nothing is partially applied to a tower.
"""
from __future__ import annotations

import math
import re
from pathlib import Path
from typing import Dict, Iterator, List, Optional, TextIO

from towersim.aircraft.aircraft import Aircraft, build_aircraft
from towersim.aircraft.characteristics import AircraftCharacteristics
from towersim.config import Config
from towersim.control.loading import LOADING_HEADER
from towersim.control.queues import AircraftQueue, LandingQueue, TakeoffQueue
from towersim.control.tower import ControlTower
from towersim.events.core import EventBus
from towersim.ground.gate import EMPTY_GATE, Gate
from towersim.ground.terminal import TERMINAL_CLASSES, Terminal
from towersim.tasks.task import Task, TaskList, TaskType
from towersim.utils.errors import InvalidTaskSequence, MalformedPersistedState, NoSpaceError
from towersim.utils.logging import get_logger


logger = get_logger(__name__)

_INT = re.compile(r"-?\d+")
_BOOLS = {"true": True, "false": False}


def _parse_int(text: str, what: str) -> int:
	if not _INT.fullmatch(text):
		raise MalformedPersistedState(f"{what} is not an integer: {text!r}")
	return int(text)


def _parse_bool(text: str, what: str) -> bool:
	try:
		return _BOOLS[text.lower()]
	except KeyError:
		raise MalformedPersistedState(f"{what} is not true/false: {text!r}") from None


def _lines(reader: TextIO) -> List[str]:
	return reader.read().splitlines()


def _next_line(lines: Iterator[str], what: str) -> str:
	line = next(lines, None)
	if line is None:
		raise MalformedPersistedState(f"Expected {what} but reached the end of input")
	return line


def _find_aircraft(callsign: str, aircraft: List[Aircraft]) -> Aircraft:
	for candidate in aircraft:
		if candidate.callsign == callsign:
			return candidate
	raise MalformedPersistedState(f"Callsign {callsign!r} does not match any loaded aircraft")


def load_tick(reader: TextIO) -> int:
	lines = _lines(reader)
	if len(lines) != 1:
		raise MalformedPersistedState("The tick section must contain exactly one line")
	ticks = _parse_int(lines[0].strip(), "The number of ticks elapsed")
	if ticks < 0:
		raise MalformedPersistedState("The number of ticks elapsed is less than zero")
	return ticks


def load_aircraft(reader: TextIO) -> List[Aircraft]:
	lines = _lines(reader)
	if not lines:
		raise MalformedPersistedState("The aircraft section is empty")
	expected = _parse_int(lines[0], "The number of aircraft")
	entries = lines[1:]
	if expected != len(entries):
		raise MalformedPersistedState(f"Expected {expected} aircraft but found {len(entries)}")
	result: List[Aircraft] = []
	seen = set()
	for line in entries:
		aircraft = read_aircraft(line)
		if aircraft.callsign in seen:
			raise MalformedPersistedState(f"Duplicate callsign {aircraft.callsign!r}")
		seen.add(aircraft.callsign)
		result.append(aircraft)
	return result


def load_terminals_with_gates(reader: TextIO, aircraft: List[Aircraft]) -> List[Terminal]:
	lines = iter(_lines(reader))
	expected = _parse_int(_next_line(lines, "the number of terminals"), "The number of terminals")
	result: List[Terminal] = []
	for line in lines:
		result.append(read_terminal(line, lines, aircraft))
	if expected != len(result):
		raise MalformedPersistedState(f"Expected {expected} terminals but found {len(result)}")

	parked: Dict[str, int] = {}
	for terminal in result:
		for gate in terminal.gates:
			if gate.aircraft_at_gate is None:
				continue
			callsign = gate.aircraft_at_gate.callsign
			if callsign in parked:
				raise MalformedPersistedState(f"Aircraft {callsign!r} is parked at more than one gate")
			parked[callsign] = gate.gate_number
	return result


def load_queues(
	reader: TextIO,
	aircraft: List[Aircraft],
	takeoff_queue: TakeoffQueue,
	landing_queue: LandingQueue,
	loading_aircraft: Dict[Aircraft, int],
) -> None:
	lines = iter(_lines(reader))
	read_queue(lines, aircraft, takeoff_queue)
	read_queue(lines, aircraft, landing_queue)
	read_loading_aircraft(lines, aircraft, loading_aircraft)
	for extra in lines:
		if extra.strip():
			raise MalformedPersistedState(f"Unexpected content after the loading block: {extra!r}")


def read_task_list(encoded: str) -> TaskList:
	tasks: List[Task] = []
	for token in encoded.split(","):
		parts = token.split("@")
		if len(parts) > 2:
			raise MalformedPersistedState(f"More than one '@' in task {token!r}")
		try:
			task_type = TaskType[parts[0]]
		except KeyError:
			raise MalformedPersistedState(f"Unknown task type {parts[0]!r}") from None
		load_percent = 0
		if len(parts) == 2:
			if task_type != TaskType.LOAD:
				raise MalformedPersistedState(f"Only LOAD tasks carry a load percentage: {token!r}")
			load_percent = _parse_int(parts[1], "A task's load percentage")
			if load_percent < 0:
				raise MalformedPersistedState(f"Negative load percentage in task {token!r}")
		tasks.append(Task(task_type, load_percent))
	try:
		return TaskList(tasks)
	except InvalidTaskSequence as exc:
		raise MalformedPersistedState(f"Invalid task list {encoded!r}: {exc}") from exc


def read_aircraft(line: str) -> Aircraft:
	parts = line.split(":")
	if len(parts) != 6:
		raise MalformedPersistedState(f"Expected 6 colon-separated fields in aircraft line {line!r}")
	callsign, characteristics_name, encoded_tasks, fuel_text, emergency_text, cargo_text = parts

	if not callsign:
		raise MalformedPersistedState("Aircraft callsign is empty")
	try:
		characteristics = AircraftCharacteristics[characteristics_name]
	except KeyError:
		raise MalformedPersistedState(f"Unknown aircraft characteristics {characteristics_name!r}") from None

	try:
		fuel = float(fuel_text)
	except ValueError:
		raise MalformedPersistedState(f"Fuel amount is not a number: {fuel_text!r}") from None
	if not math.isfinite(fuel) or fuel < 0 or fuel > characteristics.fuel_capacity:
		raise MalformedPersistedState(f"Fuel amount {fuel_text} is outside [0, {characteristics.fuel_capacity}]")

	cargo = _parse_int(cargo_text, "Cargo amount")
	if cargo < 0 or cargo > characteristics.cargo_capacity:
		raise MalformedPersistedState(f"Cargo amount {cargo} is outside [0, {characteristics.cargo_capacity}]")

	tasks = read_task_list(encoded_tasks)
	emergency = _parse_bool(emergency_text, "Emergency state")

	aircraft = build_aircraft(callsign, characteristics, tasks, fuel, cargo)
	if emergency:
		aircraft.declare_emergency()
	return aircraft


def read_queue(lines: Iterator[str], aircraft: List[Aircraft], queue: AircraftQueue) -> None:
	header = _next_line(lines, f"a {type(queue).__name__} header")
	parts = header.split(":")
	if len(parts) != 2:
		raise MalformedPersistedState(f"Malformed queue header {header!r}")
	if parts[0] != type(queue).__name__:
		raise MalformedPersistedState(f"Expected a {type(queue).__name__} block, found {parts[0]!r}")
	expected = _parse_int(parts[1], "The number of queued aircraft")
	if expected < 0:
		raise MalformedPersistedState("The number of queued aircraft is negative")
	if expected == 0:
		return
	callsigns = _next_line(lines, "a line of queued callsigns").split(",")
	if len(callsigns) != expected:
		raise MalformedPersistedState(f"Expected {expected} queued callsigns but found {len(callsigns)}")
	if len(set(callsigns)) != len(callsigns):
		raise MalformedPersistedState(f"Duplicate callsign in the {type(queue).__name__} block")
	for callsign in callsigns:
		queue.add_aircraft(_find_aircraft(callsign, aircraft))


def read_loading_aircraft(lines: Iterator[str], aircraft: List[Aircraft], loading_aircraft: Dict[Aircraft, int]) -> None:
	header = _next_line(lines, "the loading aircraft header")
	parts = header.split(":")
	if len(parts) != 2:
		raise MalformedPersistedState(f"Malformed loading header {header!r}")
	if parts[0] != LOADING_HEADER:
		raise MalformedPersistedState(f"Expected a {LOADING_HEADER} block, found {parts[0]!r}")
	expected = _parse_int(parts[1], "The number of loading aircraft")
	if expected < 0:
		raise MalformedPersistedState("The number of loading aircraft is negative")
	if expected == 0:
		return
	pairs = _next_line(lines, "a line of loading aircraft").split(",")
	if len(pairs) != expected:
		raise MalformedPersistedState(f"Expected {expected} loading aircraft but found {len(pairs)}")
	for pair in pairs:
		pair_parts = pair.split(":")
		if len(pair_parts) != 2:
			raise MalformedPersistedState(f"Malformed loading entry {pair!r}")
		ticks = _parse_int(pair_parts[1], "Ticks remaining")
		if ticks < 1:
			raise MalformedPersistedState(f"Ticks remaining for {pair_parts[0]!r} is less than one")
		loaded = _find_aircraft(pair_parts[0], aircraft)
		if loaded in loading_aircraft:
			raise MalformedPersistedState(f"Aircraft {loaded.callsign} is listed as loading more than once")
		loading_aircraft[loaded] = ticks


def read_terminal(line: str, lines: Iterator[str], aircraft: List[Aircraft]) -> Terminal:
	parts = line.split(":")
	if len(parts) != 4:
		raise MalformedPersistedState(f"Expected 4 colon-separated fields in terminal line {line!r}")
	kind, number_text, emergency_text, gate_count_text = parts

	terminal_cls = TERMINAL_CLASSES.get(kind)
	if terminal_cls is None:
		raise MalformedPersistedState(f"Unknown terminal type {kind!r}")
	number = _parse_int(number_text, "The terminal number")
	if number < 1:
		raise MalformedPersistedState("The terminal number is less than one")
	emergency = _parse_bool(emergency_text, "Terminal emergency state")
	gate_count = _parse_int(gate_count_text, "The number of gates")
	if gate_count < 0 or gate_count > Terminal.MAX_NUM_GATES:
		raise MalformedPersistedState(f"The number of gates must be between 0 and {Terminal.MAX_NUM_GATES}")

	terminal = terminal_cls(number)
	if emergency:
		terminal.declare_emergency()
	for _ in range(gate_count):
		gate = read_gate(_next_line(lines, "an encoded gate"), aircraft)
		try:
			terminal.add_gate(gate)
		except NoSpaceError as exc:
			raise MalformedPersistedState(str(exc)) from exc
	return terminal


def read_gate(line: str, aircraft: List[Aircraft]) -> Gate:
	parts = line.split(":")
	if len(parts) != 2:
		raise MalformedPersistedState(f"Expected 2 colon-separated fields in gate line {line!r}")
	number = _parse_int(parts[0], "The gate number")
	if number < 1:
		raise MalformedPersistedState("The gate number is less than one")
	gate = Gate(number)
	if parts[1] != EMPTY_GATE:
		gate.park_aircraft(_find_aircraft(parts[1], aircraft))
	return gate


def create_control_tower(tick: TextIO, aircraft: TextIO, queues: TextIO, terminals_with_gates: TextIO, bus: Optional[EventBus] = None) -> ControlTower:
	ticks_elapsed = load_tick(tick)
	loaded_aircraft = load_aircraft(aircraft)
	terminals = load_terminals_with_gates(terminals_with_gates, loaded_aircraft)
	takeoff_queue = TakeoffQueue()
	landing_queue = LandingQueue()
	loading_aircraft: Dict[Aircraft, int] = {}
	load_queues(queues, loaded_aircraft, takeoff_queue, landing_queue, loading_aircraft)

	tower = ControlTower(ticks_elapsed, loaded_aircraft, landing_queue, takeoff_queue, loading_aircraft, bus=bus)
	for terminal in terminals:
		tower.add_terminal(terminal)
	return tower


def load_from_directory(directory: Path, config: Optional[Config] = None, bus: Optional[EventBus] = None) -> ControlTower:
	config = config or Config()
	directory = Path(directory)
	try:
		with open(directory / config.tick_file) as tick, \
				open(directory / config.aircraft_file) as aircraft, \
				open(directory / config.queues_file) as queues, \
				open(directory / config.terminals_file) as terminals:
			tower = create_control_tower(tick, aircraft, queues, terminals, bus=bus)
	except FileNotFoundError as exc:
		raise MalformedPersistedState(f"Missing save file: {exc.filename}") from exc
	logger.info("Loaded tower from %s: %s", directory, tower)
	return tower
