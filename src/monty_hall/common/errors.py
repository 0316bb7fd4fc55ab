class MontyHallError(Exception):
    """Base class for everything the simulation raises on bad input"""


class InvalidTrialCount(MontyHallError, ValueError):
    pass


class EmptyAggregationInput(MontyHallError, ValueError):
    pass


class InvalidDoorSet(MontyHallError, ValueError):
    pass


class InvalidDoor(MontyHallError, ValueError):
    pass
