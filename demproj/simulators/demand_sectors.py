"""Demand sectors computing the energy service demand of a region.

A demand sector computes, for each period, the service demand of the
region from the GDP, the sector price and the elasticities.
The calibration and projection of the demand is done by the demand
model of the sector (see :py:mod:`~demproj.simulators.demand_models`).
The demand is then allocated to the subsectors.

Usage:
    Sectors are usually simulated by a
    :py:class:`~demproj.simulators.base_simulators.Region`, but they can
    be stepped alone::

        sector = BuildingDemandSector('building', 'USA', model_time)
        sector.demand_model.base_service[0] = 100.
        sector.initialize_starting_state()
        sector.step(gdp, region_info)
"""
from __future__ import annotations

import logging
from typing import Dict, List, Type, Union
import warnings
import xml.etree.ElementTree as ET

import numpy as np

from .base_simulators import SimLogger, Simulator
from .demand_models import (
    DualScalerModel, ScalerDemandModel, SingleScalerModel, income_driver
)
from .subsectors import BuildingServiceSubsector, Subsector, TranSubsector
from ..utils.error_messages import (
    NON_POSITIVE_PREVIOUS_PRICE, UNRECOGNIZED_FIELD, UNSET_BASE_SCALER
)
from ..utils.gdp import GDPProvider
from ..utils.market_info import (
    COOLING_DEGREE_DAYS, HEATING_DEGREE_DAYS, MarketInfo
)
from ..utils.model_time import ModelTime
from ..utils.parse_helpers import (
    insert_value_into_series, parse_bool, write_element,
    write_element_check_default, write_series
)
from ..utils.period_series import PeriodSeries
from ..utils.sim_types import FieldValue


log = logging.getLogger(__name__)


class DemandSector(Simulator):
    """Sector computing an energy service demand.

    The sector owns the per period inputs and outputs.
    The calibration state (scalers, base service, licensed drivers)
    belongs to its :py:attr:`demand_model`.

    Params
        name: The name of the sector.
        region_name: The name of the region of the sector.
        model_time: The model time.
        demand_model: The demand model computing the demand.
        per_capita_based: Whether the demand is driven by the GDP per
            capita (times the population) instead of the total GDP.
        logger: An optional SimLogger.
    Step input
        gdp: A :py:class:`~demproj.utils.gdp.GDPProvider`.
        region_info: Information published by the region.
    Output
        :py:meth:`get_service_demand`
        :py:meth:`get_service_pre_tech_change`
        :py:meth:`get_output`
    Step size
        One model period.

    Attributes:
        XML_NAME: Tag of the sector in xml inputs.
        SUBSECTOR_TYPES: Subsector classes that can be read, by tag.
        service: Service demand of each period. In base periods it can
            be an input.
        service_pre_tech_change: Service demand before the efficiency
            adjustment.
        output: Output of the sector.
        sector_price: Price of the sector.
        price_elasticity: Price elasticity of the demand.
        income_elasticity: Income elasticity of the demand.
        aeei: Autonomous end-use energy intensity improvement rate.
        sector_info: Information published by the sector for its
            subsectors.
        subsectors: The subsectors receiving the demand.
    """

    XML_NAME = 'demandsector'
    SUBSECTOR_TYPES: Dict[str, Type[Subsector]] = {
        Subsector.XML_NAME: Subsector,
    }

    name: str
    region_name: str
    demand_model: ScalerDemandModel
    per_capita_based: bool
    service: PeriodSeries
    service_pre_tech_change: PeriodSeries
    output: PeriodSeries
    sector_price: PeriodSeries
    price_elasticity: PeriodSeries
    income_elasticity: PeriodSeries
    aeei: PeriodSeries
    sector_info: MarketInfo
    subsectors: List[Subsector]

    def __init__(
        self, name: str, region_name: str, model_time: ModelTime,
        demand_model: ScalerDemandModel = None,
        per_capita_based: bool = False, logger: SimLogger = None,
    ) -> None:
        super().__init__(model_time, logger=logger)
        self.name = name
        self.region_name = region_name
        if demand_model is None:
            demand_model = SingleScalerModel(model_time)
        if not isinstance(demand_model, ScalerDemandModel):
            raise TypeError(
                "'demand_model' must be a ScalerDemandModel, not '{}'".format(
                    type(demand_model).__name__
                )
            )
        self.demand_model = demand_model
        self.per_capita_based = bool(per_capita_based)

        self.service = PeriodSeries(model_time, 0.0)
        self.service_pre_tech_change = PeriodSeries(model_time, 0.0)
        self.output = PeriodSeries(model_time, 0.0)
        self.sector_price = PeriodSeries(model_time, 1.0)
        self.price_elasticity = PeriodSeries(model_time, 0.0)
        self.income_elasticity = PeriodSeries(model_time, 0.0)
        self.aeei = PeriodSeries(model_time, 0.0)

        self.sector_info = MarketInfo(name)
        self.subsectors = []

    def __repr__(self) -> str:
        return "{}('{}', region='{}')".format(
            type(self).__name__, self.name, self.region_name
        )

    # Inputs

    def parse_field(
        self, name: str, value: FieldValue, year: int = None
    ) -> bool:
        """Parse an input field of the sector.

        Children extend the fields by overriding this method and
        calling it first.

        Args:
            name: The name of the field.
            value: The value read.
            year: The year of the value, None for all the periods.

        Returns:
            True if the field was recognized.
        """
        series = {
            'serviceoutput': self.service,
            'sectorprice': self.sector_price,
            'price-elasticity': self.price_elasticity,
            'income-elasticity': self.income_elasticity,
            'aeei': self.aeei,
        }
        if name in series:
            insert_value_into_series(value, series[name], year)
        elif name == 'perCapitaBased':
            self.per_capita_based = parse_bool(value)
        else:
            return False
        return True

    def xml_parse(self, node: ET.Element) -> None:
        """Read the sector inputs from its xml element.

        Unrecognized elements are ignored with a warning.
        """
        for child in node:
            if child.tag in self.SUBSECTOR_TYPES:
                self._parse_subsector(child)
            elif not self.parse_field(
                child.tag, child.text, child.get('year')
            ):
                warnings.warn(UNRECOGNIZED_FIELD.format(
                    field=child.tag, parser=repr(self)
                ))

    def _parse_subsector(self, node: ET.Element) -> None:
        name = node.get('name', '')
        for subsector in self.subsectors:
            if subsector.name == name:
                break
        else:
            subsector = self.SUBSECTOR_TYPES[node.tag](
                name, self.model_time, sector_name=self.name
            )
            self.add_subsector(subsector)
        subsector.xml_parse(node)

    def add_subsector(self, subsector: Subsector) -> None:
        if subsector.model_time is not self.model_time:
            raise ValueError(
                'The subsector {} does not share the model time of {}.'.format(
                    subsector, self
                )
            )
        subsector.sector_name = self.name
        self.subsectors.append(subsector)

    def to_input_xml(self, parent: ET.Element = None) -> ET.Element:
        """Write the inputs of the sector as xml.

        Values equal to their default are not written.

        Args:
            parent: The parent element, if None a new root is created.
        """
        if parent is None:
            element = ET.Element(self.XML_NAME, name=self.name)
        else:
            element = ET.SubElement(parent, self.XML_NAME, name=self.name)
        write_element_check_default(
            element, self.per_capita_based, 'perCapitaBased', False
        )
        write_series(element, self.service, 'serviceoutput')
        write_series(element, self.sector_price, 'sectorprice')
        write_series(element, self.price_elasticity, 'price-elasticity')
        write_series(element, self.income_elasticity, 'income-elasticity')
        write_series(element, self.aeei, 'aeei')
        self._to_input_xml_derived(element)
        for subsector in self.subsectors:
            subsector.to_input_xml(element)
        return element

    def _to_input_xml_derived(self, element: ET.Element) -> None:
        pass

    def to_debug_xml(self, period: int, parent: ET.Element = None):
        """Write the state of the sector at the given period as xml."""
        year = self.model_time.period_to_year(period)
        attrib = dict(name=self.name, year=str(year))
        attrib['variant'] = self.demand_model.VARIANT
        if parent is None:
            element = ET.Element(self.XML_NAME, attrib)
        else:
            element = ET.SubElement(parent, self.XML_NAME, attrib)
        write_element(element, self.per_capita_based, 'perCapitaBased')
        write_element(element, self.service[period], 'service')
        write_element(
            element, self.service_pre_tech_change[period],
            'servicePreTechChange'
        )
        write_element(element, self.output[period], 'output')
        write_element(element, self.sector_price[period], 'sectorprice')
        write_element(
            element, self.price_elasticity[period], 'price-elasticity'
        )
        write_element(
            element, self.income_elasticity[period], 'income-elasticity'
        )
        write_element(element, self.aeei[period], 'aeei')
        self._to_debug_xml_derived(period, element)
        return element

    def _to_debug_xml_derived(self, period: int, element: ET.Element):
        pass

    # Simulation

    def set_price(self, period: int, price: float) -> None:
        self.sector_price[period] = price

    def calc_price_ratio(self, period: int) -> float:
        """Return the ratio of the sector price to the previous period.

        Prices are not reliable before period 2, so the ratio is 1 for
        periods 0 and 1.

        Raises:
            ValueError: If the previous price is not strictly positive.
        """
        period = self.model_time.check_period(period)
        if period <= 1:
            return 1.0
        previous_price = self.sector_price[period - 1]
        if not previous_price > 0:
            raise ValueError(NON_POSITIVE_PREVIOUS_PRICE.format(
                price=previous_price, period=period,
                sector=self.name, region=self.region_name
            ))
        return self.sector_price[period] / previous_price

    def init_calc(self, period: int, region_info: MarketInfo) -> None:
        """Complete the initialization of the period.

        Must be called for all the sectors of a region before computing
        the demand of any of them.
        If the scalers are not strictly positive and are not calibrated
        in this period, they are set to 1 with a warning.
        No warning is sent in a calibration period, as the scalers are
        computed there.

        Args:
            period: The model period.
            region_info: The information published by the region.
        """
        model = self.demand_model
        if not (
            model.has_valid_scalers() or model.is_calibration_period(period)
        ):
            warnings.warn(UNSET_BASE_SCALER.format(
                period=period, sector=self.name, region=self.region_name
            ))
            model.reset_scalers(1.0)

        for subsector in self.subsectors:
            subsector.init_calc(period, self.sector_info)

    def aggregate_demand(self, gdp: GDPProvider, period: int) -> None:
        """Compute the service demand of the period.

        Stores the demand before and after the efficiency adjustment,
        then passes the demand to the subsectors.

        Args:
            gdp: The GDP of the region.
            period: The model period.

        Raises:
            ValueError: If the GDP or prices are degenerate.
        """
        context = dict(sector=self.name, region=self.region_name)
        driver = income_driver(
            gdp.get_scaled_gdp_per_capita(period),
            gdp.get_scaled_gdp(period),
            self.income_elasticity[period],
            self.per_capita_based,
            period=period, **context
        )
        pre_tech_change, demand = self.demand_model.compute_demand(
            period,
            self.calc_price_ratio(period),
            driver,
            self.price_elasticity[period],
            service=self.service[period],
            aeei=self.aeei[period],
            timestep=self.model_time.get_timestep(period),
            **context
        )

        self.service_pre_tech_change[period] = pre_tech_change
        self.service[period] = demand
        self.output[period] = demand
        # sets subsector outputs
        self.allocate_output(demand, period, gdp)
        self.aggregate_outputs(period)

    def allocate_output(
        self, demand: float, period: int, gdp: GDPProvider
    ) -> None:
        """Share the demand between the subsectors.

        The shares are the normalized share weights.
        If all the weights are 0, the demand is shared equally.
        """
        if not self.subsectors:
            return
        weights = np.array(
            [sub.share_weight[period] for sub in self.subsectors]
        )
        if weights.sum() > 0:
            shares = weights / weights.sum()
        else:
            warnings.warn(
                "All share weights are 0 in period {} for {}, demand is "
                "shared equally.".format(period, self)
            )
            shares = np.full(len(weights), 1.0 / len(weights))
        for subsector, share in zip(self.subsectors, shares):
            subsector.set_output(demand * share, period)

    def aggregate_outputs(self, period: int) -> None:
        """Sum the outputs of the subsectors in the sector output."""
        if self.subsectors:
            self.output[period] = sum(
                sub.output[period] for sub in self.subsectors
            )

    def inputs_all_fixed(self, period: int) -> bool:
        """Whether all the subsectors are calibrated in the period."""
        return bool(self.subsectors) and all(
            sub.is_calibrated(period) for sub in self.subsectors
        )

    def sum_calibrated_outputs(self, period: int) -> float:
        return sum(
            sub.get_calibrated_output(period) for sub in self.subsectors
        )

    def check_sector_cal_data(self, period: int) -> Union[float, None]:
        """Check the consistency of the calibration data.

        Not implemented for all sectors.

        Returns:
            The scale factor applied to the demand, None if no scaling.
        """
        return None

    def calc_period(self, gdp: GDPProvider) -> None:
        """Compute the demand of the current period and check it."""
        self.aggregate_demand(gdp, self.current_period)
        self.check_sector_cal_data(self.current_period)

    def step(self, gdp: GDPProvider, region_info: MarketInfo = None) -> None:
        """Simulate the current period.

        Args:
            gdp: The GDP of the region.
            region_info: The information of the region.
                Defaults to an empty information.
        """
        if region_info is None:
            region_info = MarketInfo(self.region_name)
        self.init_calc(self.current_period, region_info)
        self.calc_period(gdp)
        super().step()

    # Getters

    def get_service_demand(self) -> float:
        """Return the service demand of the current period."""
        return self.service[self.current_period]

    def get_service_pre_tech_change(self) -> float:
        """Return the service demand before efficiency improvements."""
        return self.service_pre_tech_change[self.current_period]

    def get_output(self) -> float:
        """Return the output of the sector at the current period."""
        return self.output[self.current_period]

    def get_sector_price(self) -> float:
        return self.sector_price[self.current_period]

    def get_price_ratio(self) -> float:
        """Return the price ratio used at the current period."""
        return self.calc_price_ratio(self.current_period)


class BuildingDemandSector(DemandSector):
    """Building demand sector.

    Demand is proportional to either GDP (to a power) or GDP per capita
    (to a power) times population.
    The scaler is calibrated in every period where a base service is
    given.
    The sector publishes the heating and cooling degree days of the
    region for its building services.

    Params
        :py:class:`DemandSector` params, without demand_model.
    """

    XML_NAME = 'buildingdemandsector'
    SUBSECTOR_TYPES = {
        BuildingServiceSubsector.XML_NAME: BuildingServiceSubsector,
    }
    CLIMATE_ITEMS = (HEATING_DEGREE_DAYS, COOLING_DEGREE_DAYS)
    demand_model: SingleScalerModel

    def __init__(self, name, region_name, model_time, **kwargs):
        super().__init__(
            name, region_name, model_time,
            demand_model=SingleScalerModel(model_time), **kwargs
        )

    @property
    def base_service(self) -> PeriodSeries:
        return self.demand_model.base_service

    def parse_field(self, name, value, year=None):
        if super().parse_field(name, value, year):
            pass
        elif name == 'baseservice':
            insert_value_into_series(value, self.base_service, year)
        else:
            return False
        return True

    def _to_input_xml_derived(self, element):
        write_series(element, self.base_service, 'baseservice')

    def _to_debug_xml_derived(self, period, element):
        write_element(element, self.base_service[period], 'baseservice')
        write_element(element, self.demand_model.scaler, 'baseScaler')

    def init_calc(self, period, region_info):
        """Publish the degree days, then check the scaler.

        The degree days are added to the sector info before the
        subsectors are initialized, as they read them.
        """
        for item in self.CLIMATE_ITEMS:
            self.sector_info.add_item(
                item, region_info.get_item_value(item, must_exist=False)
            )
        super().init_calc(period, region_info)


class TranSector(DemandSector):
    """Transportation demand sector.

    The demand is split between licensed drivers and the rest of the
    population, each with its own calibration scaler.
    Periods 0 and 1 are calibrated on the read-in service output.
    Projected demand is reduced by the autonomous efficiency trend.

    Params
        :py:class:`DemandSector` params, without demand_model.

    Attributes:
        computed_service: Service demand as computed by
            :py:meth:`aggregate_demand`, before any calibration
            correction.
    """

    XML_NAME = 'tranSector'
    SUBSECTOR_TYPES = {
        TranSubsector.XML_NAME: TranSubsector,
    }
    demand_model: DualScalerModel
    computed_service: PeriodSeries

    def __init__(self, name, region_name, model_time, **kwargs):
        super().__init__(
            name, region_name, model_time,
            demand_model=DualScalerModel(model_time), **kwargs
        )
        self.computed_service = PeriodSeries(model_time, 0.0)

    @property
    def percent_licensed(self) -> PeriodSeries:
        return self.demand_model.percent_licensed

    def parse_field(self, name, value, year=None):
        if super().parse_field(name, value, year):
            pass
        elif name == 'percentLicensed':
            insert_value_into_series(value, self.percent_licensed, year)
        else:
            return False
        return True

    def _to_input_xml_derived(self, element):
        write_series(element, self.percent_licensed, 'percentLicensed')

    def _to_debug_xml_derived(self, period, element):
        model = self.demand_model
        write_element(element, self.percent_licensed[period], 'percentLicensed')
        write_element(element, model.scaler, 'baseScaler')
        write_element(element, model.scaler_not_licensed, 'baseScalerNotLic')
        write_element(element, model.price_ratio, 'priceRatio')
        write_element(
            element, model.price_ratio_not_licensed, 'priceRatioNotLic'
        )

    def aggregate_demand(self, gdp, period):
        super().aggregate_demand(gdp, period)
        self.computed_service[period] = self.service[period]

    def check_sector_cal_data(self, period):
        """Match the demand to the calibrated outputs.

        If all the subsectors are calibrated in the period, the service
        demand is set to the sum of their calibrated outputs.
        The scale factor is relative to the computed demand, so
        repeating the check gives the same factor.

        Returns:
            The scale factor, None if not all subsectors are calibrated.
        """
        if not self.inputs_all_fixed(period):
            return None
        calibrated = self.sum_calibrated_outputs(period)
        computed = self.computed_service[period]
        scale_factor = calibrated / computed if computed != 0 else np.nan
        self.service[period] = calibrated
        log.debug(
            "Calibrated Demand Scaled by %s in region %s sector %s",
            scale_factor, self.region_name, self.name
        )
        return scale_factor


SECTOR_TYPES: Dict[str, Type[DemandSector]] = {
    BuildingDemandSector.XML_NAME: BuildingDemandSector,
    TranSector.XML_NAME: TranSector,
}


def sectors_from_xml(
    root: Union[ET.Element, str], model_time: ModelTime,
    region_name: str = None,
) -> List[DemandSector]:
    """Create the sectors described in an xml element or file.

    Args:
        root: A sector element, a region element containing sectors, or
            the path to an xml file containing one of them.
        model_time: The model time.
        region_name: The name of the region. Defaults to the 'name'
            attribute of the region element.

    Returns:
        The sectors read.
    """
    if isinstance(root, str):
        root = ET.parse(root).getroot()
    if root.tag in SECTOR_TYPES:
        nodes = [root]
        region_name = region_name or ''
    else:
        nodes = list(root)
        region_name = region_name or root.get('name', '')

    sectors = []
    for node in nodes:
        if node.tag not in SECTOR_TYPES:
            warnings.warn(UNRECOGNIZED_FIELD.format(
                field=node.tag, parser="region '{}'".format(region_name)
            ))
            continue
        sector = SECTOR_TYPES[node.tag](
            node.get('name', ''), region_name, model_time
        )
        sector.xml_parse(node)
        sectors.append(sector)
    return sectors
