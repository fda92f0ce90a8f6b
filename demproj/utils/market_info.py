"""Named numeric information shared between regions and sectors.

Regions publish covariates (for example the heating degree days) that
sectors copy to their own info so that their subsectors can read them
during initialization.
The set of items is open, any sector can publish new items.
"""
from __future__ import annotations

from typing import Dict
import warnings

from .error_messages import MISSING_MARKET_INFO


HEATING_DEGREE_DAYS = 'heatingDegreeDays'
COOLING_DEGREE_DAYS = 'coolingDegreeDays'


class MarketInfo():
    """String keyed store of numeric values.

    Attributes:
        name: Name used in warning messages.
    """

    name: str

    def __init__(self, name: str = '', items: Dict[str, float] = None):
        self.name = name
        self._items = {}
        if items is not None:
            for key, value in items.items():
                self.add_item(key, value)

    def add_item(self, item: str, value: float) -> None:
        """Add or overwrite an item."""
        self._items[item] = float(value)

    def has_item(self, item: str) -> bool:
        return item in self._items

    def get_item_value(self, item: str, must_exist: bool = True) -> float:
        """Get the value of an item.

        Args:
            item: The name of the item.
            must_exist: Whether to warn if the item is missing.
                Defaults to True.

        Returns:
            The value, or 0 if the item was never set.
        """
        if item in self._items:
            return self._items[item]
        if must_exist:
            warnings.warn(MISSING_MARKET_INFO.format(
                item=item, info=self
            ))
        return 0.0

    def items(self) -> Dict[str, float]:
        return dict(self._items)

    def __repr__(self) -> str:
        return "{}('{}')".format(type(self).__name__, self.name)
