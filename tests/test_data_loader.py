import os
import tempfile
import unittest
import warnings

import numpy as np
import pandas as pd

from demproj.datasets.base_loader import SectorDataLoader
from demproj.simulators.demand_sectors import BuildingDemandSector, TranSector
from demproj.utils.model_time import ModelTime


MODEL_TIME = ModelTime(1975, [15, 15, 15, 5, 5])


class TestSectorDataLoader(unittest.TestCase):

    loader = SectorDataLoader

    def setUp(self):
        self.data = pd.DataFrame({
            'year': [1975, 1990, 2005, 2010, 2015],
            'serviceoutput': [200., 210., np.nan, np.nan, np.nan],
            'percentLicensed': [0.6, 0.62, 0.64, 0.65, 0.66],
            'price-elasticity': [-0.2] * 5,
        })

    def test_instantiate(self):
        loader = self.loader(self.data)
        self.assertIsNone(loader.path)
        self.assertEqual(
            loader.fields,
            ['serviceoutput', 'percentLicensed', 'price-elasticity']
        )

    def test_errors(self):
        self.assertRaises(
            FileNotFoundError, self.loader, 'not_a_file.csv'
        )
        self.assertRaises(
            ValueError, self.loader, self.data.drop(columns='year')
        )
        with tempfile.TemporaryDirectory() as dir_name:
            path = os.path.join(dir_name, 'data.json')
            with open(path, 'w') as f:
                f.write('{}')
            self.assertRaises(ValueError, self.loader, path)

    def test_load_into(self):
        sector = TranSector('transport', 'USA', MODEL_TIME)
        recognized = self.loader(self.data).load_into(sector)
        self.assertEqual(len(recognized), 3)
        self.assertEqual(sector.service.values.tolist(), [200., 210., 0., 0., 0.])
        self.assertAlmostEqual(sector.percent_licensed[4], 0.66)
        self.assertTrue(np.all(sector.price_elasticity.values == -0.2))

    def test_unrecognized_field(self):
        sector = BuildingDemandSector('building', 'USA', MODEL_TIME)
        with self.assertWarns(UserWarning):
            recognized = self.loader(self.data).load_into(sector)
        self.assertNotIn('percentLicensed', recognized)
        self.assertIn('price-elasticity', recognized)

    def test_empty_column_ignored(self):
        data = self.data.copy()
        data['percentLicensed'] = np.nan
        sector = BuildingDemandSector('building', 'USA', MODEL_TIME)
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter('always')
            recognized = self.loader(data).load_into(sector)
        self.assertEqual(len(caught), 0)
        self.assertNotIn('percentLicensed', recognized)
        self.assertEqual(recognized, ['serviceoutput', 'price-elasticity'])

    def test_read_csv(self):
        with tempfile.TemporaryDirectory() as dir_name:
            path = os.path.join(dir_name, 'transport.csv')
            self.data.to_csv(path, index=False)
            loader = self.loader(path)
        self.assertEqual(loader.path, path)
        sector = TranSector('transport', 'USA', MODEL_TIME)
        loader.load_into(sector)
        self.assertAlmostEqual(sector.service[1], 210.)
        self.assertIn('transport.csv', repr(loader))
