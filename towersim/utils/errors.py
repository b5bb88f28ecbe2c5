"""Exception types raised by the tower simulator."""


class TowerSimError(Exception):
	pass


class InvalidTaskSequence(TowerSimError, ValueError):
	"""A task list contains a transition that is not allowed."""


class MalformedPersistedState(TowerSimError):
	"""Saved tower state could not be read back."""


class NoSuitableGateError(TowerSimError):
	"""No unoccupied gate of the right kind is available."""


class NoSpaceError(TowerSimError):
	"""A gate or terminal is already full."""
