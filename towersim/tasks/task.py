from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Iterable, List

from towersim.utils.errors import InvalidTaskSequence


class TaskType(Enum):
	AWAY = "AWAY"
	LAND = "LAND"
	WAIT = "WAIT"
	LOAD = "LOAD"
	TAKEOFF = "TAKEOFF"

	def __str__(self) -> str:
		return self.value


# current task type -> task types allowed to follow it
ALLOWED_TRANSITIONS: Dict[TaskType, FrozenSet[TaskType]] = {
	TaskType.AWAY: frozenset({TaskType.AWAY, TaskType.LAND}),
	TaskType.LAND: frozenset({TaskType.WAIT, TaskType.LOAD}),
	TaskType.WAIT: frozenset({TaskType.WAIT, TaskType.LOAD}),
	TaskType.LOAD: frozenset({TaskType.TAKEOFF}),
	TaskType.TAKEOFF: frozenset({TaskType.AWAY}),
}


@dataclass(frozen=True, eq=False)
class Task:
	type: TaskType
	load_percent: int = 0

	def __post_init__(self) -> None:
		if self.load_percent < 0:
			raise ValueError("Load percentage cannot be negative")

	def __eq__(self, other: object) -> bool:
		if not isinstance(other, Task):
			return NotImplemented
		if self.type != other.type:
			return False
		return self.type != TaskType.LOAD or self.load_percent == other.load_percent

	def __hash__(self) -> int:
		if self.type == TaskType.LOAD:
			return hash((self.type, self.load_percent))
		return hash(self.type)

	def __str__(self) -> str:
		if self.type == TaskType.LOAD:
			return f"{self.type} at {self.load_percent}%"
		return str(self.type)

	def encode(self) -> str:
		if self.type == TaskType.LOAD:
			return f"{self.type}@{self.load_percent}"
		return str(self.type)


class TaskList:
	"""Circular list of tasks an aircraft cycles through.

	The sequence is validated on construction and never changes afterwards; only the
	cursor pointing at the current task moves, via ``move_to_next_task``.
	"""

	def __init__(self, tasks: Iterable[Task]) -> None:
		tasks = list(tasks)
		if not tasks:
			raise InvalidTaskSequence("A task list must contain at least one task")
		for i, current in enumerate(tasks):
			following = tasks[(i + 1) % len(tasks)]
			if following.type not in ALLOWED_TRANSITIONS[current.type]:
				raise InvalidTaskSequence(
					f"{following.type} cannot follow {current.type} (position {i + 1} of {len(tasks)})"
				)
		self._tasks: List[Task] = tasks
		self._current = 0

	def __len__(self) -> int:
		return len(self._tasks)

	def current_task(self) -> Task:
		return self._tasks[self._current]

	def next_task(self) -> Task:
		return self._tasks[(self._current + 1) % len(self._tasks)]

	def move_to_next_task(self) -> None:
		self._current = (self._current + 1) % len(self._tasks)

	def tasks_from_current(self) -> List[Task]:
		return self._tasks[self._current:] + self._tasks[:self._current]

	def __str__(self) -> str:
		return f"TaskList currently on {self.current_task()} [{self._current + 1}/{len(self._tasks)}]"

	def encode(self) -> str:
		# first token is always the current task so a reload resumes at the same point
		return ",".join(task.encode() for task in self.tasks_from_current())
