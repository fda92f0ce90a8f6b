"""GDP providers for the demand sectors.

The demand sectors only read two values from the GDP for each period:
the scaled GDP per capita and the scaled aggregate GDP.
Both are normalized to the base period (period 0), so that their ratio
is the population ratio to the base period.
"""
from __future__ import annotations

from typing import Sequence, Union

import numpy as np

from .model_time import ModelTime


ArrayLike = Union[Sequence[float], np.ndarray]


class GDPProvider():
    """Interface of the GDP used by the demand sectors.

    Children must implement the two getters.
    They must not have side effects.
    """

    def get_scaled_gdp_per_capita(self, period: int) -> float:
        """Return the GDP per capita divided by the base period value."""
        raise NotImplementedError(
            "Method 'get_scaled_gdp_per_capita' has no implementation "
            "in {}".format(type(self).__name__)
        )

    def get_scaled_gdp(self, period: int) -> float:
        """Return the aggregate GDP divided by the base period value."""
        raise NotImplementedError(
            "Method 'get_scaled_gdp' has no implementation "
            "in {}".format(type(self).__name__)
        )


class GDP(GDPProvider):
    """Regional GDP and population trajectories.

    Attributes:
        model_time: The model time.
        gdp: The GDP for each period.
        population: The population for each period.
    """

    model_time: ModelTime
    gdp: np.ndarray
    population: np.ndarray

    def __init__(
        self, model_time: ModelTime, gdp: ArrayLike, population: ArrayLike
    ) -> None:
        """Create a GDP from GDP and population values.

        Args:
            model_time: The model time.
            gdp: GDP for each period.
            population: Population for each period.

        Raises:
            ValueError: If the lengths do not match the number of
                periods, or if the base period values are not strictly
                positive.
        """
        gdp = np.asarray(gdp, dtype=float).reshape(-1)
        population = np.asarray(population, dtype=float).reshape(-1)
        for name, arr in (('gdp', gdp), ('population', population)):
            if len(arr) != model_time.n_periods:
                raise ValueError(
                    "'{}' has {} values but the model has {} periods.".format(
                        name, len(arr), model_time.n_periods
                    )
                )
            if arr[0] <= 0:
                raise ValueError(
                    "Base period '{}' must be strictly positive, "
                    "got {}.".format(name, arr[0])
                )
        if np.any(population <= 0):
            raise ValueError('Population must be strictly positive.')

        self.model_time = model_time
        self.gdp = gdp
        self.population = population

    @classmethod
    def from_labor_productivity(
        cls, model_time: ModelTime, base_gdp: float,
        population: ArrayLike, productivity_growth: Union[float, ArrayLike],
    ) -> GDP:
        """Create a GDP growing with population and labor productivity.

        GDP of a period is the GDP of the previous period, times the
        population ratio, times the labor productivity compounded
        annually over the time step.

        Args:
            model_time: The model time.
            base_gdp: GDP of the base period.
            population: Population for each period.
            productivity_growth: Annual labor productivity growth rate,
                single value or one value per period.
        """
        population = np.asarray(population, dtype=float).reshape(-1)
        if len(population) != model_time.n_periods:
            raise ValueError(
                "'population' has {} values but the model has {} "
                "periods.".format(len(population), model_time.n_periods)
            )
        growth = np.broadcast_to(
            np.asarray(productivity_growth, dtype=float),
            (model_time.n_periods,)
        )
        gdp = np.empty(model_time.n_periods, dtype=float)
        gdp[0] = base_gdp
        for period in range(1, model_time.n_periods):
            gdp[period] = (
                gdp[period - 1]
                * population[period] / population[period - 1]
                * (1 + growth[period]) ** model_time.get_timestep(period)
            )
        return cls(model_time, gdp, population)

    def get_scaled_gdp(self, period: int) -> float:
        period = self.model_time.check_period(period)
        return float(self.gdp[period] / self.gdp[0])

    def get_scaled_gdp_per_capita(self, period: int) -> float:
        period = self.model_time.check_period(period)
        per_capita = self.gdp / self.population
        return float(per_capita[period] / per_capita[0])

    def get_population_ratio(self, period: int) -> float:
        period = self.model_time.check_period(period)
        return float(self.population[period] / self.population[0])
