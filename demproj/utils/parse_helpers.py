"""Helper functions for reading and writing sector data as XML.

Per-period values are written as one element per period, with the
calendar year as attribute::

    <baseservice year="1990">100.0</baseservice>

An element without year attribute applies to all the periods.
Values equal to a known default are omitted when writing inputs.
"""
from __future__ import annotations

from typing import Union
import warnings
import xml.etree.ElementTree as ET

import numpy as np

from .error_messages import UNKNOWN_MODEL_YEAR
from .model_time import ModelTime
from .period_series import PeriodSeries
from .sim_types import FieldValue


def parse_float(value: FieldValue) -> float:
    """Convert a parsed value to float.

    Raises:
        ValueError: If the value cannot be converted.
    """
    if isinstance(value, str):
        value = value.strip()
    return float(value)


def parse_bool(value: FieldValue) -> bool:
    """Convert a parsed value to bool.

    Accepts 1/0, true/false and yes/no (case insensitive) and numbers.

    Raises:
        ValueError: If the value is not recognized as a boolean.
    """
    if isinstance(value, (bool, np.bool_)):
        return bool(value)
    if isinstance(value, (int, float, np.number)):
        return bool(value)
    text = str(value).strip().lower()
    if text in ('1', 'true', 'yes'):
        return True
    if text in ('0', 'false', 'no'):
        return False
    raise ValueError("Cannot convert '{}' to bool.".format(value))


def insert_value_into_series(
    value: FieldValue, series: PeriodSeries,
    year: Union[int, str, None] = None,
) -> bool:
    """Insert a parsed value in a series.

    Args:
        value: The value to insert.
        series: The series where the value is inserted.
        year: The calendar year of the value.
            If None, the value is inserted in all the periods.

    Returns:
        Whether the value was inserted. If the year is not a model
        year, a warning is sent and the value is ignored.
    """
    value = parse_float(value)
    if year is None:
        series.fill(value)
        return True
    model_time = series.model_time
    year = int(year)
    if not model_time.has_year(year):
        warnings.warn(UNKNOWN_MODEL_YEAR.format(
            year=year, years=model_time.get_years()
        ))
        return False
    series.set_year(year, value)
    return True


def write_element(
    parent: ET.Element, value: FieldValue, tag: str, year: int = None
) -> ET.Element:
    """Write a single value as a child element of parent."""
    element = ET.SubElement(parent, tag)
    if year is not None:
        element.set('year', str(int(year)))
    if isinstance(value, (bool, np.bool_)):
        element.text = '1' if value else '0'
    else:
        element.text = repr(float(value))
    return element


def write_element_check_default(
    parent: ET.Element, value: FieldValue, tag: str, default: FieldValue,
    year: int = None,
) -> Union[ET.Element, None]:
    """Write a value only if it differs from the default.

    Returns:
        The written element, or None if the value was the default.
    """
    if value == default:
        return None
    return write_element(parent, value, tag, year=year)


def write_series(
    parent: ET.Element, series: PeriodSeries, tag: str,
    default: float = None,
) -> None:
    """Write one element per period, omitting default values.

    Args:
        parent: The parent element.
        series: The series to write.
        tag: The tag of the elements.
        default: The value not to write. Defaults to the default of
            the series.
    """
    if default is None:
        default = series.default
    model_time: ModelTime = series.model_time
    for period, value in enumerate(series):
        write_element_check_default(
            parent, value, tag, default,
            year=model_time.period_to_year(period)
        )


def to_string(element: ET.Element) -> str:
    """Return the xml string of the element, indented."""
    if hasattr(ET, 'indent'):
        ET.indent(element)
    return ET.tostring(element, encoding='unicode')
