class RoomError(Exception):
    """Base exception for room generation and lookup."""


class InvalidDimension(RoomError, ValueError):
    """Raised for non-positive sizes, density outside [0, 1] or malformed connectivity."""


class NoReachableSpawn(RoomError):
    """Raised when a generated map has no open cell a spawn could use."""


class OutOfBoundsAccess(RoomError, IndexError):
    """Raised when a grid coordinate lies outside the grid extent."""


class RoomAlreadyGenerated(RoomError):
    """Raised when generation is requested twice on the same room."""


class RoomNotGenerated(RoomError):
    """Raised when a room is rendered or queried for its spawn before generation."""


class UnknownRoom(RoomError, KeyError):
    """Raised when a level is asked for a room id it does not own."""
