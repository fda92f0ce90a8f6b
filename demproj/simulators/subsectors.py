"""Subsectors receiving the service demand of a sector.

Subsectors share the demand of their sector using their share weights.
They can be calibrated, in which case their calibrated output is used
by the sector to check the consistency of its demand.
"""
from __future__ import annotations

import xml.etree.ElementTree as ET
import warnings

from ..utils.error_messages import UNRECOGNIZED_FIELD
from ..utils.market_info import (
    COOLING_DEGREE_DAYS, HEATING_DEGREE_DAYS, MarketInfo
)
from ..utils.model_time import ModelTime
from ..utils.parse_helpers import (
    insert_value_into_series, write_series
)
from ..utils.period_series import PeriodSeries
from ..utils.sim_types import FieldValue

# Calibrated output when the subsector is not calibrated
NOT_CALIBRATED = -1.0


class Subsector():
    """Share based subsector.

    Attributes:
        XML_NAME: Tag of the subsector in xml inputs.
        name: Name of the subsector.
        sector_name: Name of the sector of the subsector.
        share_weight: Share weight for each period.
        output: Output of the subsector for each period.
        calibrated_output: Calibrated output for each period,
            :py:data:`NOT_CALIBRATED` if not calibrated.
    """

    XML_NAME = 'subsector'
    name: str
    sector_name: str
    share_weight: PeriodSeries
    output: PeriodSeries
    calibrated_output: PeriodSeries

    def __init__(
        self, name: str, model_time: ModelTime, sector_name: str = '',
        share_weight: float = 1.0,
    ) -> None:
        self.name = name
        self.sector_name = sector_name
        self.model_time = model_time
        self.share_weight = PeriodSeries(model_time, share_weight)
        self.output = PeriodSeries(model_time, 0.0)
        self.calibrated_output = PeriodSeries(model_time, NOT_CALIBRATED)

    def parse_field(
        self, name: str, value: FieldValue, year: int = None
    ) -> bool:
        """Parse an input field of the subsector.

        Returns:
            True if the field was recognized.
        """
        if name == 'shareweight':
            insert_value_into_series(value, self.share_weight, year)
        elif name == 'calOutputValue':
            insert_value_into_series(value, self.calibrated_output, year)
        else:
            return False
        return True

    def xml_parse(self, node: ET.Element) -> None:
        """Read the subsector from its xml element."""
        for child in node:
            if not self.parse_field(child.tag, child.text, child.get('year')):
                warnings.warn(UNRECOGNIZED_FIELD.format(
                    field=child.tag, parser=repr(self)
                ))

    def to_input_xml(self, parent: ET.Element) -> ET.Element:
        element = ET.SubElement(parent, self.XML_NAME, name=self.name)
        write_series(element, self.share_weight, 'shareweight', default=1.0)
        write_series(element, self.calibrated_output, 'calOutputValue')
        return element

    def init_calc(self, period: int, sector_info: MarketInfo) -> None:
        """Complete the initialization of the period.

        Called by the sector, after the sector has published its info.
        """
        pass

    def set_output(self, demand: float, period: int) -> None:
        self.output[period] = demand

    def is_calibrated(self, period: int) -> bool:
        return self.calibrated_output[period] >= 0

    def get_calibrated_output(self, period: int) -> float:
        """Return the calibrated output, 0 if not calibrated."""
        if not self.is_calibrated(period):
            return 0.0
        return self.calibrated_output[period]

    def __repr__(self) -> str:
        return "{}('{}', sector='{}')".format(
            type(self).__name__, self.name, self.sector_name
        )


class BuildingServiceSubsector(Subsector):
    """Building service, reading its degree days from the sector info.

    Heating services read the heating degree days and cooling services
    the cooling degree days.

    Attributes:
        service_type: 'heating', 'cooling' or 'other'.
        degree_days: The degree days read at each period.
    """

    XML_NAME = 'buildingservice'
    SERVICE_TYPES = {
        'heating': HEATING_DEGREE_DAYS,
        'cooling': COOLING_DEGREE_DAYS,
        'other': None,
    }
    service_type: str
    degree_days: PeriodSeries

    def __init__(self, name, model_time, sector_name='', share_weight=1.0,
                 service_type='other'):
        super().__init__(
            name, model_time, sector_name=sector_name,
            share_weight=share_weight
        )
        self._set_service_type(service_type)
        self.degree_days = PeriodSeries(model_time, 0.0)

    def _set_service_type(self, service_type: str):
        if service_type not in self.SERVICE_TYPES:
            raise ValueError(
                "Unknown service type '{}', must be one of {}.".format(
                    service_type, list(self.SERVICE_TYPES)
                )
            )
        self.service_type = service_type

    def parse_field(self, name, value, year=None):
        if super().parse_field(name, value, year):
            pass
        elif name == 'serviceType':
            self._set_service_type(str(value).strip())
        else:
            return False
        return True

    def to_input_xml(self, parent):
        element = super().to_input_xml(parent)
        if self.service_type != 'other':
            ET.SubElement(element, 'serviceType').text = self.service_type
        return element

    def init_calc(self, period, sector_info):
        key = self.SERVICE_TYPES[self.service_type]
        if key is not None:
            self.degree_days[period] = sector_info.get_item_value(key)
        super().init_calc(period, sector_info)


class TranSubsector(Subsector):
    """Transportation mode."""

    XML_NAME = 'tranSubsector'

