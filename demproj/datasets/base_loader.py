"""Module implementing the loading of sector inputs from tables.

Tables have a 'year' column and one column per input field of the
sector, named as in the xml inputs ('baseservice', 'price-elasticity',
'percentLicensed', ...).
Empty cells are not read.
CSV and Excel files are supported.
"""
from __future__ import annotations

import os
from typing import List, Union
import warnings

import numpy as np
import pandas as pd

from ..utils.error_messages import UNRECOGNIZED_FIELD


YEAR_COLUMN = 'year'


class SectorDataLoader:
    """Load the inputs of a sector from a table.

    The fields are passed to the
    :py:meth:`~demproj.simulators.demand_sectors.DemandSector.parse_field`
    method of the sector, so the same fields as in xml inputs are
    recognized.

    Attributes:
        path: The path of the file, None if the loader was created
            from a DataFrame.
        data: The table.
        sheet_name: The sheet read for Excel files.
    """

    path: Union[str, None]
    data: pd.DataFrame
    sheet_name: Union[str, int]

    def __init__(
        self, path: Union[str, pd.DataFrame], sheet_name: Union[str, int] = 0,
    ) -> None:
        """Read the table.

        Args:
            path: Path to a '.csv', '.xls' or '.xlsx' file, or a
                DataFrame.
            sheet_name: The sheet to read in Excel files.
                Defaults to the first sheet.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the file type is not supported or if the
                table has no year column.
        """
        self.sheet_name = sheet_name
        if isinstance(path, pd.DataFrame):
            self.path = None
            data = path.copy()
        else:
            self.path = path
            data = self._read_file(path)
        data.columns = [str(col).strip() for col in data.columns]
        if YEAR_COLUMN not in data.columns:
            raise ValueError(
                "Sector data must have a '{}' column, found {}.".format(
                    YEAR_COLUMN, list(data.columns)
                )
            )
        self.data = data

    def _read_file(self, path: str) -> pd.DataFrame:
        if not os.path.isfile(path):
            self._raise_missing_file(path)
        extension = os.path.splitext(path)[1].lower()
        if extension == '.csv':
            return pd.read_csv(path)
        if extension in ('.xls', '.xlsx'):
            return pd.read_excel(path, sheet_name=self.sheet_name)
        raise ValueError(
            "Unsupported file type '{}' for sector data '{}'.".format(
                extension, path
            )
        )

    def _raise_missing_file(self, path: str):
        """Raise custom error for missing data files.

        Raises:
            FileNotFoundError: The error specifying the missing file.
        """
        msg = "".join((
            "Sector data file '{}' does not exist. ",
            "Current directory is '{}'.",
        )).format(path, os.getcwd())
        raise FileNotFoundError(msg)

    @property
    def fields(self) -> List[str]:
        """The input fields of the table."""
        return [col for col in self.data.columns if col != YEAR_COLUMN]

    def load_into(self, sector) -> List[str]:
        """Pass the values of the table to the sector.

        Args:
            sector: The DemandSector receiving the inputs.

        Returns:
            The fields that were recognized by the sector.
            Unrecognized fields are ignored with a warning, empty
            columns are ignored.
        """
        recognized = []
        for field in self.fields:
            column = self.data[[YEAR_COLUMN, field]].dropna()
            if len(column) == 0:
                continue
            accepted = [
                sector.parse_field(field, value, int(year))
                for year, value in zip(column[YEAR_COLUMN], column[field])
            ]
            if np.all(accepted):
                recognized.append(field)
            else:
                warnings.warn(UNRECOGNIZED_FIELD.format(
                    field=field, parser=repr(self)
                ))
        return recognized

    def __repr__(self) -> str:
        return "{}('{}')".format(
            type(self).__name__,
            self.path if self.path is not None else 'DataFrame'
        )
