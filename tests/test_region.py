import unittest

import numpy as np

from test_base_simulators import MODEL_TIME
from demproj.simulators.base_simulators import Region, SimLogger
from demproj.simulators.demand_sectors import BuildingDemandSector, TranSector
from demproj.simulators.subsectors import BuildingServiceSubsector
from demproj.utils.gdp import GDP
from demproj.utils.market_info import (
    COOLING_DEGREE_DAYS, HEATING_DEGREE_DAYS, MarketInfo
)


class RegionTests(unittest.TestCase):
    def setUp(self):
        self.gdp = GDP(
            MODEL_TIME, [1., 1.5, 2., 2.2, 2.5], [1., 1.1, 1.2, 1.25, 1.3]
        )
        self.building = BuildingDemandSector(
            'building', 'USA', MODEL_TIME, per_capita_based=True
        )
        self.building.base_service[0] = 100.
        self.building.income_elasticity.fill(0.5)
        self.heating = BuildingServiceSubsector(
            'heating', MODEL_TIME, service_type='heating'
        )
        self.building.add_subsector(self.heating)

        self.transport = TranSector('transport', 'USA', MODEL_TIME)
        self.transport.service.fill(200.)
        self.transport.percent_licensed.fill(0.6)
        self.transport.income_elasticity.fill(0.8)

        self.region_info = {
            HEATING_DEGREE_DAYS: 2500., COOLING_DEGREE_DAYS: 1200.
        }

    def make_region(self, **kwargs):
        return Region(
            'USA', [self.building, self.transport], self.gdp,
            region_info=self.region_info, **kwargs
        )

    def test_region_info_from_dict(self):
        region = self.make_region()
        self.assertIsInstance(region.region_info, MarketInfo)
        self.assertEqual(
            region.region_info.get_item_value(COOLING_DEGREE_DAYS), 1200.
        )

    def test_step(self):
        region = self.make_region()
        region.step()
        self.assertEqual(region.current_period, 1)
        self.assertEqual(self.building.current_period, 1)
        self.assertEqual(self.transport.current_period, 1)
        self.assertAlmostEqual(self.building.service[0], 100.)
        self.assertAlmostEqual(self.transport.service[0], 200.)

    def test_degree_days_before_subsectors(self):
        region = self.make_region()
        region.step()
        self.assertEqual(self.heating.degree_days[0], 2500.)

    def test_run(self):
        region = self.make_region()
        region.run()
        self.assertTrue(region.is_finished())
        self.assertTrue(self.building.is_finished())
        with self.assertRaises(IndexError):
            region.step()

    def test_same_as_sectors_alone(self):
        region = self.make_region()
        region.run()
        building = BuildingDemandSector(
            'building', 'USA', MODEL_TIME, per_capita_based=True
        )
        building.base_service[0] = 100.
        building.income_elasticity.fill(0.5)
        info = MarketInfo('USA', self.region_info)
        while not building.is_finished():
            building.step(self.gdp, info)
        self.assertTrue(np.allclose(
            building.service.values, self.building.service.values
        ))

    def test_logger(self):
        region = self.make_region(
            logger=SimLogger('current_year', 'get_service_demand')
        )
        region.run()
        demands = region.logger.get('get_service_demand')
        self.assertEqual(demands.shape, (5, 2))
        self.assertAlmostEqual(demands[0, 0], 100.)
        self.assertAlmostEqual(demands[1, 1], 200.)
        self.assertTrue(np.allclose(demands[:, 0], self.building.service.values))
        df = region.logger.to_dataframe()
        self.assertEqual(list(df.index), [1975, 1990, 2005, 2010, 2015])

    def test_getters(self):
        region = self.make_region()
        region.step()
        self.assertTrue(np.allclose(
            region.get_sector_price(), np.array([1., 1.])
        ))
        self.assertEqual(region.get_sector_price(1), 1.)

    def test_get_sector(self):
        region = self.make_region()
        self.assertIs(region.get_sector('transport'), self.transport)
        with self.assertRaises(KeyError):
            region.get_sector('industry')

    def test_initialize_starting_state(self):
        region = self.make_region()
        region.step()
        region.initialize_starting_state()
        self.assertEqual(region.current_period, 0)
        self.assertEqual(self.building.current_period, 0)
        region.initialize_starting_state(2)
        self.assertEqual(region.current_period, 2)
        self.assertEqual(self.transport.current_period, 2)
