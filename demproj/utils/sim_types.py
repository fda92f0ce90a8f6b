"""Support for Typing in simulators."""
from __future__ import annotations
from typing import Callable, Tuple, Union


# Value read from an input file, as text or as number
FieldValue = Union[str, float, int, bool]
# (pre technical change demand, demand)
DemandResult = Tuple[float, float]
GetMethod = Callable[..., float]
