"""Read the sectors of a region from xml and csv inputs and run them.

The debug xml of each period is written next to this file.
"""
import logging
import os
import sys

sys.path.insert(1, os.path.join(sys.path[0], '..'))

import xml.etree.ElementTree as ET

from demproj.datasets.base_loader import SectorDataLoader
from demproj.simulators.base_simulators import Region, SimLogger
from demproj.simulators.demand_sectors import TranSector, sectors_from_xml
from demproj.utils.gdp import GDP
from demproj.utils.market_info import HEATING_DEGREE_DAYS
from demproj.utils.model_time import ModelTime
from demproj.utils.parse_helpers import to_string

# shows the calibration messages of the sectors
logging.basicConfig(level=logging.DEBUG)

data_dir = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'data')
model_time = ModelTime.from_years([1975, 1990, 2005, 2010, 2015])
gdp = GDP(
    model_time,
    gdp=[4500., 6800., 9900., 10500., 11400.],
    population=[216., 250., 282., 310., 325.],
)

sectors = sectors_from_xml(
    os.path.join(data_dir, 'usa_region.xml'), model_time
)

# A second transport sector read from a table
rail_freight = TranSector('rail freight', 'USA', model_time)
SectorDataLoader(os.path.join(data_dir, 'transport.csv')).load_into(
    rail_freight
)
sectors.append(rail_freight)

region = Region(
    'USA', sectors, gdp,
    region_info={HEATING_DEGREE_DAYS: 4500.},
    logger=SimLogger('current_year', 'get_service_demand'),
)

debug = ET.Element('debug', region=region.name)
while not region.is_finished():
    period = region.current_period
    region.step()
    for sector in region.sectors:
        sector.to_debug_xml(period, debug)

print(region.logger.to_dataframe())

with open(os.path.join(data_dir, 'debug_usa.xml'), 'w') as f:
    f.write(to_string(debug))
