"""Per-period value containers."""
from __future__ import annotations

from typing import Iterator, Sequence, Union

import numpy as np

from .model_time import ModelTime


class PeriodSeries():
    """Values indexed by model period.

    The series is allocated at construction with one value per period
    of the :py:class:`~demproj.utils.model_time.ModelTime` and is never
    resized.
    Accessing a period outside of the model time raises an
    :py:exc:`IndexError`, negative periods are not wrapped around.

    Attributes:
        model_time: The model time of the series.
        default: The value the series was initialized with.
    """

    model_time: ModelTime
    default: float

    def __init__(
        self, model_time: ModelTime, default: float = 0.0,
        values: Union[Sequence[float], np.ndarray] = None,
    ) -> None:
        """Create a series.

        Args:
            model_time: The model time.
            default: The value for all the periods. Defaults to 0.
            values: Optional values for all the periods, must have
                one value per period.

        Raises:
            TypeError: If model_time is not a ModelTime.
            ValueError: If values do not match the number of periods.
        """
        if not isinstance(model_time, ModelTime):
            raise TypeError(
                "'model_time' must be a ModelTime, not '{}'.".format(
                    type(model_time).__name__
                )
            )
        self.model_time = model_time
        self.default = float(default)
        self._values = np.full(model_time.n_periods, self.default, dtype=float)
        if values is not None:
            values = np.asarray(values, dtype=float).reshape(-1)
            if len(values) != model_time.n_periods:
                raise ValueError(
                    'Got {} values for {} periods.'.format(
                        len(values), model_time.n_periods
                    )
                )
            self._values[:] = values

    def __len__(self) -> int:
        return len(self._values)

    def __getitem__(self, period: int) -> float:
        return float(self._values[self.model_time.check_period(period)])

    def __setitem__(self, period: int, value: float) -> None:
        self._values[self.model_time.check_period(period)] = float(value)

    def __iter__(self) -> Iterator[float]:
        return iter(self._values.tolist())

    def __repr__(self) -> str:
        return '{}({})'.format(type(self).__name__, self._values.tolist())

    @property
    def values(self) -> np.ndarray:
        """A copy of the values of all the periods."""
        return self._values.copy()

    def get_year(self, year: int) -> float:
        return self[self.model_time.year_to_period(year)]

    def set_year(self, year: int, value: float) -> None:
        self[self.model_time.year_to_period(year)] = value

    def fill(self, value: float) -> None:
        """Set all the periods to the value."""
        self._values[:] = float(value)

    def is_default(self, period: int) -> bool:
        """Whether the value of the period is still the default value."""
        return self[period] == self.default
