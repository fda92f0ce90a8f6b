import os
import sys

sys.path.insert(1, os.path.join(sys.path[0], '..'))

from demproj.simulators.base_simulators import Region, SimLogger
from demproj.simulators.demand_sectors import BuildingDemandSector, TranSector
from demproj.simulators.subsectors import BuildingServiceSubsector
from demproj.utils.gdp import GDP
from demproj.utils.market_info import COOLING_DEGREE_DAYS, HEATING_DEGREE_DAYS
from demproj.utils.model_time import ModelTime

model_time = ModelTime(1975, [15, 15, 15, 5, 5, 5, 5, 5, 5, 5])

# GDP grows with the population and 1.5% labor productivity per year
gdp = GDP.from_labor_productivity(
    model_time, base_gdp=4500.,
    population=[216, 250, 282, 310, 325, 340, 353, 366, 378, 389],
    productivity_growth=0.015,
)

building = BuildingDemandSector(
    'building', 'USA', model_time, per_capita_based=True
)
building.base_service[0] = 10.
building.base_service[1] = 12.
building.income_elasticity.fill(0.6)
building.price_elasticity.fill(-0.2)
building.add_subsector(
    BuildingServiceSubsector('heating', model_time, service_type='heating')
)
building.add_subsector(
    BuildingServiceSubsector(
        'cooling', model_time, share_weight=0.5, service_type='cooling'
    )
)

transport = TranSector('transport', 'USA', model_time)
transport.service[0] = 20.
transport.service[1] = 23.
transport.percent_licensed.fill(0.65)
transport.income_elasticity.fill(0.8)
transport.price_elasticity.fill(-0.3)
transport.aeei.fill(0.01)

# Price of both sectors increases by 10% every period after 1990
for period in range(2, model_time.n_periods):
    for sector in (building, transport):
        sector.set_price(period, sector.sector_price[period - 1] * 1.1)

region = Region(
    'USA', [building, transport], gdp,
    region_info={HEATING_DEGREE_DAYS: 4500., COOLING_DEGREE_DAYS: 1300.},
    logger=SimLogger('current_year', 'get_service_demand', 'get_output'),
)
region.run()

print(region.logger.to_dataframe())
# Plots all the logged data one by one
region.logger.plot()
# Gets array of the data, can be used for your own purpose
service_demand = region.logger.get('get_service_demand')
