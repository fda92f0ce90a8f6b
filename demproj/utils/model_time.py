"""Model time of the simulation.

The model time maps the model periods to calendar years and gives the
length in years of each time step.
It is passed explicitly to every object that needs it.
"""
from __future__ import annotations

from typing import List, Sequence

import numpy as np

from .error_messages import PERIOD_OUT_OF_RANGE, UNKNOWN_MODEL_YEAR


class ModelTime():
    """Periods and years of a simulation.

    Period 0 is the start year.
    The time step of a period is the number of years between the
    previous period and this one.

    Attributes:
        start_year: The calendar year of period 0.
        years: The calendar year of each period.
        timesteps: The length in years of the time step ending at
            each period.
    """

    start_year: int
    years: np.ndarray
    timesteps: np.ndarray

    def __init__(self, start_year: int, timesteps: Sequence[int]) -> None:
        """Create a model time.

        Args:
            start_year: The calendar year of the first period.
            timesteps: The length in years of each time step.
                The first value is the length of the step ending at
                the start year.

        Raises:
            ValueError: If no time step is given or if some are not
                strictly positive.
        """
        timesteps = np.array(timesteps, dtype=int).reshape(-1)
        if len(timesteps) == 0:
            raise ValueError('ModelTime requires at least one time step.')
        if np.any(timesteps <= 0):
            raise ValueError(
                'All time steps must be strictly positive, got {}.'.format(
                    timesteps.tolist()
                )
            )
        self.start_year = int(start_year)
        self.timesteps = timesteps
        # the first step ends at the start year
        self.years = self.start_year + np.cumsum(timesteps) - timesteps[0]

    @classmethod
    def from_years(
        cls, years: Sequence[int], first_timestep: int = None
    ) -> ModelTime:
        """Create a model time from the list of the model years.

        Args:
            years: The calendar years of the periods, strictly
                increasing.
            first_timestep: The length of the step ending at the first
                year. Defaults to the length of the second step, or 1
                if there is a single year.

        Raises:
            ValueError: If the years are not strictly increasing.
        """
        years = np.array(years, dtype=int).reshape(-1)
        if len(years) == 0:
            raise ValueError('ModelTime requires at least one year.')
        diffs = np.diff(years)
        if np.any(diffs <= 0):
            raise ValueError(
                'Model years must be strictly increasing, got {}.'.format(
                    years.tolist()
                )
            )
        if first_timestep is None:
            first_timestep = diffs[0] if len(diffs) > 0 else 1
        return cls(years[0], [first_timestep, *diffs])

    @property
    def n_periods(self) -> int:
        """The total number of periods of the model."""
        return len(self.years)

    def check_period(self, period: int) -> int:
        """Return the period as int, raise IndexError if out of range."""
        period = int(period)
        if period < 0 or period >= self.n_periods:
            raise IndexError(PERIOD_OUT_OF_RANGE.format(
                period=period, n_periods=self.n_periods
            ))
        return period

    def get_timestep(self, period: int) -> int:
        """Return the length in years of the step ending at period."""
        return int(self.timesteps[self.check_period(period)])

    def period_to_year(self, period: int) -> int:
        return int(self.years[self.check_period(period)])

    def has_year(self, year: int) -> bool:
        return int(year) in self.years

    def year_to_period(self, year: int) -> int:
        """Return the period of a model year.

        Raises:
            ValueError: If the year is not a model year.
        """
        year = int(year)
        periods = np.where(self.years == year)[0]
        if len(periods) == 0:
            raise ValueError(UNKNOWN_MODEL_YEAR.format(
                year=year, years=self.years.tolist()
            ))
        return int(periods[0])

    def get_years(self) -> List[int]:
        return self.years.tolist()

    def __repr__(self) -> str:
        return '{}(start_year={}, timesteps={})'.format(
            type(self).__name__, self.start_year, self.timesteps.tolist()
        )
