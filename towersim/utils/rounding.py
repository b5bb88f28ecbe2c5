import math


def round_half_up(value: float) -> int:
	"""Round to the nearest integer, with halves going up (20.5 -> 21)."""
	return math.floor(value + 0.5)
