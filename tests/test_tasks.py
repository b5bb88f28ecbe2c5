import pytest

from towersim.tasks.task import ALLOWED_TRANSITIONS, Task, TaskList, TaskType
from towersim.utils.errors import InvalidTaskSequence

from conftest import cycle


def test_cursor_returns_to_start_after_full_cycle():
	tasks = cycle("AWAY", "AWAY", "LAND", "WAIT", "WAIT", "LOAD@60", "TAKEOFF")
	start = tasks.current_task()
	for _ in range(len(tasks)):
		tasks.move_to_next_task()
	assert tasks.current_task() == start
	assert str(tasks) == "TaskList currently on AWAY [1/7]"


def test_next_task_does_not_move_cursor():
	tasks = cycle("LAND", "LOAD@20", "TAKEOFF", "AWAY")
	assert tasks.next_task() == Task(TaskType.LOAD, 20)
	assert tasks.current_task() == Task(TaskType.LAND)
	tasks.move_to_next_task()
	tasks.move_to_next_task()
	tasks.move_to_next_task()
	# wraps around to the first task
	assert tasks.next_task() == Task(TaskType.LAND)


def test_single_away_task_is_a_valid_cycle():
	tasks = cycle("AWAY")
	tasks.move_to_next_task()
	assert tasks.current_task().type == TaskType.AWAY


def test_empty_task_list_is_rejected():
	with pytest.raises(InvalidTaskSequence):
		TaskList([])


DISALLOWED = [
	(current, following)
	for current in TaskType
	for following in TaskType
	if following not in ALLOWED_TRANSITIONS[current]
]


@pytest.mark.parametrize("current,following", DISALLOWED)
def test_every_disallowed_pair_is_rejected(current, following):
	# pad the pair into an otherwise valid cycle so only this adjacency is wrong
	with pytest.raises(InvalidTaskSequence):
		TaskList([Task(current, 10), Task(following, 10)] + _close_cycle(following, current))


def _close_cycle(start, end):
	"""Valid tasks leading from after ``start`` back round to ``end``."""
	order = [TaskType.AWAY, TaskType.LAND, TaskType.WAIT, TaskType.LOAD, TaskType.TAKEOFF]
	path = []
	idx = order.index(start)
	while True:
		idx = (idx + 1) % len(order)
		if order[idx] == end:
			return path
		path.append(Task(order[idx], 10))


def test_task_list_is_accepted_when_all_adjacencies_are_allowed():
	tasks = cycle("AWAY", "LAND", "LOAD@100", "TAKEOFF")
	assert tasks.encode() == "AWAY,LAND,LOAD@100,TAKEOFF"


def test_encode_starts_at_current_task():
	tasks = cycle("LAND", "WAIT", "LOAD@75", "TAKEOFF", "AWAY")
	tasks.move_to_next_task()
	tasks.move_to_next_task()
	assert tasks.encode() == "LOAD@75,TAKEOFF,AWAY,LAND,WAIT"


def test_task_equality_depends_on_load_percent_only_for_load():
	assert Task(TaskType.LOAD, 10) != Task(TaskType.LOAD, 20)
	assert Task(TaskType.LOAD, 10) == Task(TaskType.LOAD, 10)
	assert Task(TaskType.WAIT, 10) == Task(TaskType.WAIT, 99)
	assert hash(Task(TaskType.WAIT, 10)) == hash(Task(TaskType.WAIT))
	assert str(Task(TaskType.LOAD, 40)) == "LOAD at 40%"
	assert Task(TaskType.LOAD, 40).encode() == "LOAD@40"
