"""Base simulators module.

This Module contains the base classes for running period by period
simulations of the demand sectors.
The Simulators contained in this module serve as basis for the
sectors and for the region driving them.
"""
from __future__ import annotations

from typing import Dict, List, NoReturn, Union

import numpy as np
import pandas as pd

from ..utils.gdp import GDPProvider
from ..utils.market_info import MarketInfo
from ..utils.model_time import ModelTime
from ..utils.sim_types import GetMethod


class SimLogger():
    """Specialized logger for any Simulator object.

    Once the parameters are define, it can be set to a
    :py:class:`Simulator`.
    During the simulation, the :py:class:`SimLogger` will automatically
    collect the data, once per period.
    Then the :py:meth:`SimLogger.get` method can be used to access the
    collected data.
    """

    # Some protected names that should never be transformed to numpy format
    _protected: List[str] = ['current_year']
    length: int

    def __init__(
            self, attributes_list: Union[str, List[str]], *args,
        ) -> None:
        """Create a logger.

        Args:
            attributes_list: the name of simulator method-s or
                attribute-s to be recorded by the logger.
        """
        # Checks the type of input attributes
        if isinstance(attributes_list, list):
            self.attributes_list = attributes_list.copy()
        elif isinstance(attributes_list, str):
            self.attributes_list = [attributes_list, *args]
        else:
            raise TypeError('attributes_list variable must be list')

        self.dic_results = {att: [] for att in self.attributes_list}
        self.length = 0

    def __add__(self, other):
        """Addition of logger merges the value of two loggers together.

        Not secure if the logger have the same attributes names.

        Args:
            other: Other logger to add.

        Raises:
            ValueError: If the logger do not have the same lengths.
            TypeError: If the other object is not a SimLogger.

        Returns:
            logger: Same logger with added the new values.
        """
        if isinstance(other, SimLogger):
            if self.length != other.length:
                raise ValueError(
                    "{} and {} have different lengths: {}, {}.".format(
                        self, other,
                        self.length, other.length
                    )
                )
            self.dic_results.update(other.dic_results)
            self.attributes_list += other.attributes_list
            return self
        else:
            raise TypeError(
                "unsupported operand type(s) for +: '{}' and '{}'".format(
                    type(self).__name__, type(other).__name__
                ))

    def get(self, attribute: str = None) -> np.ndarray:
        """Get the logged values for the desired attribute.

        Args:
            attribute: The name of an attribute

        Raises:
            ValueError: If the value of the attribute is not in this logger

        Returns:
            Array with the logged values for desired attribute.
        """
        if attribute is None:
            if len(self.attributes_list) == 1:
                attribute = self.attributes_list[0]
            else:
                raise ValueError(
                    "Usage logger.get() is valid only if the logger "
                    "stores one single attributes. Not the case for logger "
                    "{} with attributes: {}.".format(
                        self, self.attributes_list
                    )
                )

        if attribute in self.attributes_list:
            return np.asarray(self.dic_results[attribute])
        else:
            self._raise_unkown_attribute(attribute)

    def clear(self, attribute: Union[List, str] = None) -> None:
        """Clear the requested attribute from the logger.

        If attribute
        not specified, clears all attributes.

        Args:
            attribute: The attribute to clear. Defaults to None.

        Raises:
            ValueError: If the attribute is not recognized.
        """
        if isinstance(attribute, list):
            # recursively clear a list input of attributes
            for att in attribute:
                self.clear(att)
        elif attribute in self.attributes_list:
            self.dic_results[attribute] = []
        elif attribute is None:
            for att in self.attributes_list:
                self.dic_results[att] = []
        else:
            self._raise_unkown_attribute(attribute)

        self.length = 0

    def copy(self) -> SimLogger:
        """Create an empty logger with the same attributes."""
        return SimLogger(self.attributes_list.copy())

    def visit_simulator(self, sim: Simulator) -> None:
        """Visit a simulator object

        Args:
            sim: The simulator that is visited. The SimLogger will
                request and store the attributes registered in the
                logger.

        Note:
            You usually won't need to use this method, as it is called
            in :py:meth:`Simulator.step`
        """
        for attribute in self.attributes_list:
            result = getattr(sim, attribute)
            # if it is a callable, call it
            if callable(result):
                result = result()

            if attribute in self._protected:
                self.dic_results[attribute].append(result)
            else:
                self.dic_results[attribute].append(np.array(result))

        self.length += 1

    def to_dataframe(self) -> pd.DataFrame:
        """Return the logged values as a DataFrame, one row per period.

        If 'current_year' was logged, it is used as index.
        """
        data = {
            attr: list(self.get(attr)) for attr in self.attributes_list
            if attr != 'current_year'
        }
        df = pd.DataFrame(data)
        if 'current_year' in self.attributes_list:
            df.index = pd.Index(self.get('current_year'), name='year')
        else:
            df.index.name = 'period'
        return df

    def plot(self):
        """Plots the values stored by the logger against the years.

        The plots are shown sequentially.
        Values logged for several sectors are plotted on the same
        figure, one line per sector.
        """
        import matplotlib.pyplot as plt
        if 'current_year' in self.attributes_list:
            x = self.get('current_year')
        else:
            x = np.arange(self.length)
        for attr in self.attributes_list:
            if attr == 'current_year':
                continue
            serie = self.get(attr)
            if len(serie.shape) > 1:
                for i, sector_serie in enumerate(np.moveaxis(serie, 1, 0)):
                    plt.plot(x, sector_serie, label='{}_{}'.format(attr, i))
            else:
                plt.plot(x, serie, label=attr)
            plt.legend()
            plt.show()

    def _raise_unkown_attribute(self, attribute: str) -> NoReturn:
        """Raise a Value Error for the given attribute.

        Args:
            attribute: The name of the invalid attribute.

        Raises:
            ValueError: Shows the attribute and the missing attrs.
        """
        err_msg = "'{}' not in SimLogger with attributes: '{}'"
        raise ValueError(err_msg.format(attribute, self.attributes_list))


class Simulator():
    """Abstract mother class for all the period simulators.

    Children call :py:meth:`Simulator.step` at the end of their own
    step, once the period has been computed.

    Attributes:
        model_time: The model time of the simulation.
        current_period: The period that the next step will compute.
        logger: A logger object, that can log the value of variables
            during the simulation.
    """

    model_time: ModelTime
    current_period: int
    logger: SimLogger

    def __init__(
            self, model_time: ModelTime, logger: SimLogger = None
        ) -> None:
        """Initialize the simulator.

        This method is supposed to be called in the :py:func:`__init__`
        of all children of
        :py:class:`Simulator` .

        Args:
            model_time: The model time.
            logger: An optional logger.

        Raises:
            TypeError: If model_time is not a ModelTime or logger is not
                a SimLogger.
        """
        if not isinstance(model_time, ModelTime):
            raise TypeError(
                "'model_time' must be a ModelTime, not:'{}'.".format(
                    type(model_time).__name__
                )
            )
        self.model_time = model_time
        self.current_period = 0

        # check that logger is None or SimLogger
        if logger is None:
            self.logger = logger
        elif isinstance(logger, SimLogger):
            self.logger = logger.copy()
        else:
            raise TypeError('logger kwargs is not instance of SimLogger')

    @property
    def current_year(self) -> int:
        return self.model_time.period_to_year(self.current_period)

    def initialize_starting_state(
        self, start_period: int = 0, *args, **kwargs
    ) -> None:
        r"""Initialize the simulator at the first period.

        If a :py:obj:`start_period` is given, the initilization will
        call the step function to simulate the requested number of
        periods.
        Any arguments to be used by the step function can be passed as
        :py:obj:`*args`, :py:obj:`**kwargs`.

        Args:
            start_period: The period at which the
                simulation should start. Defaults to 0.

        Raises:
            TypeError: If the type of start_period is not int.
            ValueError: If the start_period is negative or larger than
                the number of periods.
        """
        if not isinstance(start_period, int):
            raise TypeError('start_period must be an integer')
        if start_period < 0 or start_period > self.model_time.n_periods:
            raise ValueError(
                'start_period must be between 0 and {}'.format(
                    self.model_time.n_periods
                )
            )
        self.current_period = 0
        for _ in range(start_period):
            self.step(*args, **kwargs)

        # clears the logger after initialization
        if self.logger:
            self.logger.clear()

    def is_finished(self) -> bool:
        """Whether all the periods have been simulated."""
        return self.current_period >= self.model_time.n_periods

    def step(self) -> None:
        """Finish a simulation step.

        Calls :py:attr:`logger` on the period just computed, and
        increments :py:attr:`current_period`.

        Raises:
            IndexError: If all the periods were already simulated.
        """
        self.model_time.check_period(self.current_period)
        if self.logger:
            self.logger.visit_simulator(self)
        self.current_period += 1


class Region(Simulator):
    """Region simulating its sectors.

    At each step, the initialization of the period is completed for all
    the sectors before any sector computes its demand, as sectors
    publish information that other sectors use.
    The Region has all the get_ methods of its first sector, that return
    an array with the value of each sector.

    Attributes:
        name: The name of the region.
        sectors: The sectors of the region.
        gdp: The GDP of the region.
        region_info: The information published by the region.
    """

    name: str
    sectors: List[Simulator]
    gdp: GDPProvider
    region_info: MarketInfo

    def __init__(
            self, name: str, sectors: List[Simulator], gdp: GDPProvider,
            region_info: Union[MarketInfo, Dict[str, float]] = None,
            logger: SimLogger = None,
        ) -> None:
        """Initialize a region.

        Args:
            name: Name of the region.
            sectors: The sectors of the region. They must share the
                model time.
            gdp: The GDP provider of the region.
            region_info: Information published by the region, for
                example the degree days.
            logger: SimLogger. Defaults to None.

        Raises:
            ValueError: If no sector is given or if the sectors do not
                share the same model time.
        """
        if len(sectors) == 0:
            raise ValueError('A region needs at least one sector.')
        model_time = sectors[0].model_time
        if any(sec.model_time is not model_time for sec in sectors):
            raise ValueError('All the sectors must share the model time.')
        super().__init__(model_time, logger=logger)

        self.name = name
        self.sectors = sectors
        self.gdp = gdp
        if isinstance(region_info, MarketInfo):
            self.region_info = region_info
        else:
            self.region_info = MarketInfo(name, items=region_info)

        self._assign_getters()

    def initialize_starting_state(self, start_period: int = 0) -> None:
        for sector in self.sectors:
            sector.initialize_starting_state()
        super().initialize_starting_state(start_period)

    def get_sector(self, name: str) -> Simulator:
        """Return the sector with the given name.

        Raises:
            KeyError: If no sector has this name.
        """
        for sector in self.sectors:
            if sector.name == name:
                return sector
        raise KeyError(
            "No sector '{}' in region '{}'.".format(name, self.name)
        )

    def step(self) -> None:
        """Compute the demand of all sectors for the current period."""
        period = self.current_period
        for sector in self.sectors:
            sector.init_calc(period, self.region_info)
        for sector in self.sectors:
            sector.calc_period(self.gdp)
        # log the region while the sectors are still at this period
        super().step()
        for sector in self.sectors:
            Simulator.step(sector)

    def run(self) -> None:
        """Step until all the periods are simulated."""
        while not self.is_finished():
            self.step()

    def _assign_getters(self) -> None:
        """Assign getters to the region, using the sectors."""
        target_sim = self.sectors[0]
        # Only accepts getter that are not already implemented
        getters = [method for method in dir(target_sim)
                    if method.startswith('get_') and (method not in dir(self))]
        for getter_name in getters:
            setattr(self, getter_name, self._create_multi_getter(getter_name))

    def _create_multi_getter(self, getter_name: str) -> GetMethod:
        """Create a getter methods that wraps up the sectors get
        methods.

        Args:
            getter_name: The name of the getter method
        """
        this_getter_name = getter_name
        def getter(n_ieth_sector: int = None):
            value = np.array([
                getattr(sector, this_getter_name)()
                for sector in self.sectors
            ])
            if n_ieth_sector is None:
                return value
            else:
                return value[n_ieth_sector]

        getter.__doc__ = getattr(self.sectors[0], getter_name).__doc__

        return getter
