import os
import tempfile
import unittest
import xml.etree.ElementTree as ET

import numpy as np

from demproj.simulators.demand_sectors import (
    BuildingDemandSector, TranSector, sectors_from_xml
)
from demproj.utils.model_time import ModelTime
from demproj.utils.parse_helpers import (
    insert_value_into_series,
    parse_bool,
    parse_float,
    to_string,
    write_element,
    write_element_check_default,
    write_series,
)
from demproj.utils.period_series import PeriodSeries


MODEL_TIME = ModelTime(1975, [15, 15, 15, 5, 5])

REGION_XML = """
<region name="USA">
    <buildingdemandsector name="building">
        <perCapitaBased>1</perCapitaBased>
        <baseservice year="1975">100</baseservice>
        <income-elasticity>0.5</income-elasticity>
        <buildingservice name="heating">
            <serviceType>heating</serviceType>
            <shareweight>2</shareweight>
        </buildingservice>
    </buildingdemandsector>
    <tranSector name="transport">
        <serviceoutput>200</serviceoutput>
        <percentLicensed year="1975">0.6</percentLicensed>
        <aeei year="2010">0.02</aeei>
        <tranSubsector name="road">
            <calOutputValue year="2010">150</calOutputValue>
        </tranSubsector>
    </tranSector>
</region>
"""


class TestParseValues(unittest.TestCase):
    def test_parse_float(self):
        self.assertEqual(parse_float(' 1.5\n'), 1.5)
        self.assertEqual(parse_float(2), 2.)
        with self.assertRaises(ValueError):
            parse_float('abc')

    def test_parse_bool(self):
        for value in ['1', 'true', 'Yes', 1, True]:
            self.assertTrue(parse_bool(value))
        for value in ['0', 'False', 'no', 0., False]:
            self.assertFalse(parse_bool(value))
        with self.assertRaises(ValueError):
            parse_bool('maybe')

    def test_insert_all_periods(self):
        series = PeriodSeries(MODEL_TIME)
        self.assertTrue(insert_value_into_series('0.3', series))
        self.assertTrue(np.all(series.values == 0.3))

    def test_insert_year(self):
        series = PeriodSeries(MODEL_TIME)
        self.assertTrue(insert_value_into_series('2', series, '1990'))
        self.assertEqual(series.values.tolist(), [0., 2., 0., 0., 0.])

    def test_insert_unknown_year(self):
        series = PeriodSeries(MODEL_TIME)
        with self.assertWarns(UserWarning):
            self.assertFalse(insert_value_into_series(2, series, 1980))
        self.assertTrue(np.all(series.values == 0.))


class TestWriteElements(unittest.TestCase):
    def setUp(self):
        self.root = ET.Element('root')

    def test_write_element(self):
        element = write_element(self.root, 0.5, 'aeei', year=1990)
        self.assertEqual(element.get('year'), '1990')
        self.assertEqual(element.text, '0.5')
        self.assertEqual(write_element(self.root, True, 'flag').text, '1')

    def test_check_default(self):
        self.assertIsNone(
            write_element_check_default(self.root, 1.0, 'percentLicensed', 1.0)
        )
        self.assertEqual(len(self.root), 0)
        write_element_check_default(self.root, 0.6, 'percentLicensed', 1.0)
        self.assertEqual(len(self.root), 1)

    def test_write_series(self):
        series = PeriodSeries(MODEL_TIME, 1.0)
        series[2] = 0.6
        write_series(self.root, series, 'percentLicensed')
        self.assertEqual(len(self.root), 1)
        self.assertEqual(self.root[0].get('year'), '2005')

    def test_to_string(self):
        write_element(self.root, 2.0, 'value')
        self.assertIn('<value>2.0</value>', to_string(self.root))


class TestSectorsXML(unittest.TestCase):
    def setUp(self):
        self.root = ET.fromstring(REGION_XML)

    def test_read_region(self):
        building, transport = sectors_from_xml(self.root, MODEL_TIME)
        self.assertIsInstance(building, BuildingDemandSector)
        self.assertIsInstance(transport, TranSector)
        self.assertEqual(building.region_name, 'USA')
        self.assertTrue(building.per_capita_based)
        self.assertEqual(building.base_service.values.tolist()[:2], [100., -1.])
        self.assertTrue(np.all(building.income_elasticity.values == 0.5))
        self.assertEqual(building.subsectors[0].service_type, 'heating')
        self.assertEqual(building.subsectors[0].share_weight[3], 2.)

        self.assertTrue(np.all(transport.service.values == 200.))
        self.assertEqual(transport.percent_licensed[0], 0.6)
        self.assertEqual(transport.percent_licensed[1], 1.)
        self.assertEqual(transport.aeei[3], 0.02)
        self.assertTrue(transport.subsectors[0].is_calibrated(3))
        self.assertFalse(transport.subsectors[0].is_calibrated(2))

    def test_read_file(self):
        with tempfile.TemporaryDirectory() as dir_name:
            path = os.path.join(dir_name, 'region.xml')
            ET.ElementTree(self.root).write(path)
            sectors = sectors_from_xml(path, MODEL_TIME, region_name='EU')
        self.assertEqual([sec.name for sec in sectors], ['building', 'transport'])
        self.assertEqual(sectors[0].region_name, 'EU')

    def test_single_sector(self):
        sectors = sectors_from_xml(self.root[1], MODEL_TIME)
        self.assertEqual(len(sectors), 1)
        self.assertEqual(sectors[0].name, 'transport')

    def test_unrecognized_field(self):
        ET.SubElement(self.root[0], 'unknownField').text = '3'
        with self.assertWarns(UserWarning):
            sectors_from_xml(self.root, MODEL_TIME)

    def test_unrecognized_sector(self):
        ET.SubElement(self.root, 'industry', name='steel')
        with self.assertWarns(UserWarning):
            sectors = sectors_from_xml(self.root, MODEL_TIME)
        self.assertEqual(len(sectors), 2)

    def test_same_subsector_merged(self):
        node = ET.SubElement(self.root[1], 'tranSubsector', name='road')
        ET.SubElement(node, 'shareweight').text = '0.5'
        transport = sectors_from_xml(self.root, MODEL_TIME)[1]
        self.assertEqual(len(transport.subsectors), 1)
        self.assertEqual(transport.subsectors[0].share_weight[0], 0.5)

    def test_defaults_not_written(self):
        transport = sectors_from_xml(self.root, MODEL_TIME)[1]
        element = transport.to_input_xml()
        self.assertEqual(element.tag, 'tranSector')
        licensed = element.findall('percentLicensed')
        self.assertEqual(len(licensed), 1)
        self.assertEqual(licensed[0].get('year'), '1975')
        self.assertIsNone(element.find('perCapitaBased'))
        self.assertIsNone(element.find('tranSubsector/shareweight'))
        self.assertEqual(len(element.findall('serviceoutput')), 5)

    def test_input_xml_read_back(self):
        building = sectors_from_xml(self.root, MODEL_TIME)[0]
        region = ET.Element('region', name='USA')
        building.to_input_xml(region)
        read_back = sectors_from_xml(region, MODEL_TIME)[0]
        self.assertTrue(read_back.per_capita_based)
        self.assertTrue(np.all(
            read_back.base_service.values == building.base_service.values
        ))
        self.assertEqual(read_back.subsectors[0].service_type, 'heating')
        self.assertTrue(np.all(
            read_back.subsectors[0].share_weight.values == 2.
        ))
