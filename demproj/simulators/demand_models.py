"""Calibrated power-law models of the energy service demand.

A demand model is the payload of a
:py:class:`~demproj.simulators.demand_sectors.DemandSector`.
It holds the calibration scalers and the variant specific inputs, and
computes the service demand of a period.

In a base period, the observed service demand is used to compute the
scaler(s).
In the following periods, the scaler(s) project the demand using the
price ratio and the GDP raised to the elasticities:

.. math::

    D_p = S \\cdot r_p^{\\epsilon_p} \\cdot G_p

where :math:`G_p` is the income driver (see :py:func:`income_driver`).
"""
from __future__ import annotations

import numpy as np

from ..utils.model_time import ModelTime
from ..utils.period_series import PeriodSeries
from ..utils.error_messages import (
    NON_FINITE_DEMAND_TERM, NON_POSITIVE_GDP_PER_CAPITA
)
from ..utils.sim_types import DemandResult


# Value of the scalers before calibration
UNSET_SCALER = -1.0
# Value of the base service when no calibration data is given
NO_BASE_SERVICE = -1.0


def safe_power(
    base: float, exponent: float, term: str,
    period: int = None, sector: str = '', region: str = '',
) -> float:
    """Compute base**exponent, raise if the result is not finite.

    Args:
        base: The base.
        exponent: The exponent.
        term: Name of the term, used in the error message.
        period, sector, region: Used in the error message.

    Raises:
        ValueError: If the result is nan or infinite.
    """
    with np.errstate(divide='ignore', invalid='ignore', over='ignore'):
        out = np.power(float(base), float(exponent))
    if not np.isfinite(out):
        raise ValueError(NON_FINITE_DEMAND_TERM.format(
            term=term, period=period, sector=sector, region=region
        ))
    return float(out)


def income_driver(
    gdp_per_capita: float, total_gdp: float, income_elasticity: float,
    per_capita_based: bool, period: int = None, sector: str = '',
    region: str = '',
) -> float:
    """Compute the GDP term of the demand.

    If per capita based, the driver is the GDP per capita to the power
    of the income elasticity, times the population ratio
    (total_gdp / gdp_per_capita).
    Otherwise, it is the total GDP to the power of the income
    elasticity.

    Args:
        gdp_per_capita: The scaled GDP per capita.
        total_gdp: The scaled aggregate GDP.
        income_elasticity: The income elasticity of the period.
        per_capita_based: Whether the demand is per capita based.
        period, sector, region: Used for the error messages.

    Raises:
        ValueError: If per capita based and the GDP per capita is not
            strictly positive, or if the driver is not finite.
    """
    context = dict(period=period, sector=sector, region=region)
    if per_capita_based:
        if not gdp_per_capita > 0:
            raise ValueError(NON_POSITIVE_GDP_PER_CAPITA.format(
                gdp_per_capita=gdp_per_capita, **context
            ))
        driver = safe_power(
            gdp_per_capita, income_elasticity, 'GDP per capita term',
            **context
        )
        # population ratio
        return driver * total_gdp / gdp_per_capita
    return safe_power(total_gdp, income_elasticity, 'GDP term', **context)


class ScalerDemandModel():
    """Base class for the demand models.

    Children implement :py:meth:`compute_demand`,
    :py:meth:`is_calibration_period` and :py:meth:`has_valid_scalers`.

    Attributes:
        VARIANT: Tag identifying the model variant.
        model_time: The model time.
    """

    VARIANT: str = ''
    model_time: ModelTime

    def __init__(self, model_time: ModelTime) -> None:
        self.model_time = model_time

    def compute_demand(
        self, period: int, price_ratio: float, driver: float,
        price_elasticity: float, service: float = 0.0, aeei: float = 0.0,
        timestep: int = 1, sector: str = '', region: str = '',
    ) -> DemandResult:
        """Compute the service demand of a period.

        Args:
            period: The model period.
            price_ratio: The ratio of the sector price to the price of
                the previous period.
            driver: The income driver of the period, see
                :py:func:`income_driver`.
            price_elasticity: The price elasticity of the period.
            service: The observed service demand of the period, if any.
            aeei: The autonomous efficiency trend of the period.
            timestep: The length of the time step, in years.
            sector, region: Used for the error messages.

        Returns:
            pre_tech_change, demand: The demand before the efficiency
            adjustment and the final demand.
        """
        raise NotImplementedError(
            "Method 'compute_demand' has no implementation "
            "in {}".format(type(self).__name__)
        )

    def has_valid_scalers(self) -> bool:
        """Whether all the scalers are strictly positive."""
        raise NotImplementedError(
            "Method 'has_valid_scalers' has no implementation "
            "in {}".format(type(self).__name__)
        )

    def is_calibration_period(self, period: int) -> bool:
        """Whether the scalers are computed in this period."""
        raise NotImplementedError(
            "Method 'is_calibration_period' has no implementation "
            "in {}".format(type(self).__name__)
        )

    def reset_scalers(self, value: float = 1.0) -> None:
        """Set all the scalers to the value."""
        raise NotImplementedError(
            "Method 'reset_scalers' has no implementation "
            "in {}".format(type(self).__name__)
        )


class SingleScalerModel(ScalerDemandModel):
    """Demand proportional to one scaled GDP term.

    Calibration happens in any period where a base service is given.

    Attributes:
        scaler: The calibration scaler, :py:data:`UNSET_SCALER` until
            calibrated.
        base_service: The observed service demand, for the periods
            where it is known. :py:data:`NO_BASE_SERVICE` otherwise.
    """

    VARIANT = 'single-scaler'
    scaler: float
    base_service: PeriodSeries

    def __init__(self, model_time: ModelTime) -> None:
        super().__init__(model_time)
        self.scaler = UNSET_SCALER
        self.base_service = PeriodSeries(model_time, NO_BASE_SERVICE)

    def is_calibration_period(self, period: int) -> bool:
        return self.base_service[period] >= 0

    def has_valid_scalers(self) -> bool:
        return self.scaler > 0

    def reset_scalers(self, value: float = 1.0) -> None:
        self.scaler = float(value)

    def compute_demand(
        self, period, price_ratio, driver, price_elasticity,
        service=0.0, aeei=0.0, timestep=1, sector='', region='',
    ):
        context = dict(period=period, sector=sector, region=region)
        price_term = safe_power(
            price_ratio, price_elasticity, 'price term', **context
        )
        if self.is_calibration_period(period):
            base_service = self.base_service[period]
            # the scaler absorbs the calibration
            self.scaler = base_service * safe_power(
                price_term * driver, -1.0, 'base scaler', **context
            )
            demand = base_service
        else:
            demand = self.scaler * price_term * driver
        return demand, demand


class DualScalerModel(ScalerDemandModel):
    """Demand split between two parts of the population.

    The population is split between licensed drivers and non licensed,
    each part having its own scaler and price ratio.
    Periods 0 and 1 are both calibration periods.
    Projected demand is decreased by the autonomous efficiency trend.

    Attributes:
        scaler: The scaler of the licensed population.
        scaler_not_licensed: The scaler of the other population.
        price_ratio: The price ratio of the licensed population.
        price_ratio_not_licensed: The price ratio of the other
            population.
        percent_licensed: The fraction of the population being
            licensed, for each period.
    """

    VARIANT = 'dual-scaler'
    N_CALIBRATION_PERIODS = 2
    scaler: float
    scaler_not_licensed: float
    price_ratio: float
    price_ratio_not_licensed: float
    percent_licensed: PeriodSeries

    def __init__(self, model_time: ModelTime) -> None:
        super().__init__(model_time)
        self.scaler = UNSET_SCALER
        self.scaler_not_licensed = UNSET_SCALER
        self.price_ratio = 1.0
        self.price_ratio_not_licensed = 1.0
        self.percent_licensed = PeriodSeries(model_time, 1.0)

    def is_calibration_period(self, period: int) -> bool:
        return self.model_time.check_period(period) < (
            self.N_CALIBRATION_PERIODS
        )

    def has_valid_scalers(self) -> bool:
        return self.scaler > 0 and self.scaler_not_licensed > 0

    def reset_scalers(self, value: float = 1.0) -> None:
        self.scaler = float(value)
        self.scaler_not_licensed = float(value)

    def compute_demand(
        self, period, price_ratio, driver, price_elasticity,
        service=0.0, aeei=0.0, timestep=1, sector='', region='',
    ):
        context = dict(period=period, sector=sector, region=region)
        if self.is_calibration_period(period):
            self.price_ratio = 1.0
            self.price_ratio_not_licensed = 1.0
            fraction = self.percent_licensed[period]
            inverse_driver = safe_power(
                driver, -1.0, 'base scaler', **context
            )
            self.scaler = service * fraction * safe_power(
                self.price_ratio, -price_elasticity, 'price term', **context
            ) * inverse_driver
            self.scaler_not_licensed = service * (1 - fraction) * safe_power(
                self.price_ratio_not_licensed, -price_elasticity,
                'price term', **context
            ) * inverse_driver
            return service, service

        # normalized to the previous period, not to the base period
        self.price_ratio = price_ratio
        self.price_ratio_not_licensed = price_ratio
        pre_tech_change = (
            self.scaler * safe_power(
                self.price_ratio, price_elasticity, 'price term', **context
            )
            + self.scaler_not_licensed * safe_power(
                self.price_ratio_not_licensed, price_elasticity,
                'price term', **context
            )
        ) * driver
        # not a cumulative technical change
        efficiency_loss = safe_power(
            1 + aeei, -timestep, 'efficiency term', **context
        )
        return pre_tech_change, pre_tech_change * efficiency_loss
