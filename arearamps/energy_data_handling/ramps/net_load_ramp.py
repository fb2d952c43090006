from __future__ import annotations

from arearamps.config import RampConfig
from arearamps.energy_data_handling.ramps.ramp_calculator import RampCalculator
from arearamps.energy_data_handling.ramps.ramp_resampler import RampResampler
from arearamps.enums import TableTypeEnum, TimeStepEnum
from arearamps.simulation_data.simulation_options import SimulationOptions, resolve_simulation_options
from arearamps.simulation_data.simulation_table import (
    SimulationTable,
    SimulationTableCollection,
    TableTypeError,
    add_class_and_attributes,
    check_attributes,
)
from arearamps.utils.logging import get_logger

logger = get_logger(__name__)


class NetLoadRampCalculator:
    """Ramps of net load and balance for areas and / or districts at any time step.

    Accepts either a single table of areas or districts, or a collection holding an areas
    and / or a districts table. For every table the hourly ramps are computed with the
    RampCalculator and brought to the requested time step and synthesis mode with the
    RampResampler. Other tables of a collection (e.g. links) are ignored.

    Columns of the result:
        - hourly, no synthesis: netLoadRamp, balanceRamp, areaRamp
        - otherwise: avg_, min_ and max_ version of each of the three ramps

    Args:
        config: Ramp settings, see RampConfig.
        ramp_calculator: Computes the hourly ramps.
        resampler: Brings the hourly ramps to the requested time step.

    Example:

        >>> calculator = NetLoadRampCalculator()
        >>> annual_ramps = calculator.calculate(simulation_data, time_step='annual')
        >>> annual_ramps.areas.data
    """
    SUPPORTED_TABLE_TYPES = (TableTypeEnum.AREAS, TableTypeEnum.DISTRICTS)

    def __init__(
            self,
            config: RampConfig | dict = None,
            ramp_calculator: RampCalculator = None,
            resampler: RampResampler = None,
    ):
        self.config = RampConfig().merge(config)
        self.ramp_calculator = ramp_calculator or RampCalculator(self.config)
        self.resampler = resampler or RampResampler(mean_prefix=self.config.mean_prefix)

    def calculate(
            self,
            data: SimulationTable | SimulationTableCollection,
            time_step: TimeStepEnum | str = TimeStepEnum.HOURLY,
            synthesis: bool = False,
            ignore_must_run: bool = False,
            options: SimulationOptions = None,
    ) -> SimulationTable | SimulationTableCollection:
        if not isinstance(data, (SimulationTable, SimulationTableCollection)):
            raise TypeError(
                f'data must be {SimulationTable.__name__} or {SimulationTableCollection.__name__}, got {type(data)}'
            )

        time_step = TimeStepEnum.from_value(time_step)
        if self.config.check_input_attributes:
            check_attributes(data, TimeStepEnum.HOURLY, False)
        options = resolve_simulation_options(data, options)

        if isinstance(data, SimulationTableCollection):
            return self._calculate_for_collection(data, time_step, synthesis, ignore_must_run, options)
        return self._calculate_for_table(data, time_step, synthesis, ignore_must_run, options)

    def _calculate_for_collection(
            self,
            data: SimulationTableCollection,
            time_step: TimeStepEnum,
            synthesis: bool,
            ignore_must_run: bool,
            options: SimulationOptions,
    ) -> SimulationTableCollection:
        if data.is_empty_of_areas_and_districts:
            raise TableTypeError("'data' does not contain area or district data")

        results = {}
        for name in ['areas', 'districts']:
            table = getattr(data, name)
            if table is not None:
                results[name] = self._calculate_for_table(table, time_step, synthesis, ignore_must_run, options)

        if len(results) == 0:
            raise TableTypeError("'data' needs to contain area and/or district data.")

        return add_class_and_attributes(
            SimulationTableCollection(**results), synthesis, time_step, options
        )

    def _calculate_for_table(
            self,
            table: SimulationTable,
            time_step: TimeStepEnum,
            synthesis: bool,
            ignore_must_run: bool,
            options: SimulationOptions,
    ) -> SimulationTable:
        if table.table_type not in self.SUPPORTED_TABLE_TYPES:
            raise TableTypeError("'data' does not contain area or district data")

        logger.info(
            f'Computing net load ramps of {len(table)} {table.table_type.value} rows '
            f'(time_step={time_step.value}, synthesis={synthesis}).'
        )
        ramps = self.ramp_calculator.calculate(table, ignore_must_run, options)
        ramps = self.resampler.resample(ramps, time_step, synthesis)
        return add_class_and_attributes(ramps, synthesis, time_step, options, TableTypeEnum.NET_LOAD_RAMP)


def net_load_ramp(
        data: SimulationTable | SimulationTableCollection,
        time_step: TimeStepEnum | str = TimeStepEnum.HOURLY,
        synthesis: bool = False,
        ignore_must_run: bool = False,
        options: SimulationOptions = None,
        config: RampConfig | dict = None,
) -> SimulationTable | SimulationTableCollection:
    """Computes the ramps of the net load and the balance of areas and / or districts.

    Args:
        data: Table of areas or districts, or a collection holding at least one of them.
            Tables must contain BALANCE and either netLoad or the columns needed to derive
            it (see NetLoadCalculator).
        time_step: Time step of the result; ramps are always computed hourly first.
        synthesis: Collapse the mcYear dimension into avg_ / min_ / max_ columns.
        ignore_must_run: Treat must-run generation as dispatchable when deriving netLoad.
        options: Simulation options; resolved from data when omitted.
        config: Ramp settings overriding the RampConfig defaults.

    Returns:
        A table of type netLoadRamp, or a collection with one such table per input table.

    Raises:
        MissingColumnError: If BALANCE is missing or netLoad cannot be derived.
        TableTypeError: If data does not contain area or district data.
        InvalidTableAttributesError: If data is not hourly, detailed (mcYear-level) data.
    """
    return NetLoadRampCalculator(config).calculate(data, time_step, synthesis, ignore_must_run, options)


if __name__ == '__main__':
    import pandas as pd

    df = pd.DataFrame({
        'area': ['a', 'a', 'a'],
        'timeId': [1, 2, 3],
        'BALANCE': [10., 15., 5.],
        'netLoad': [100., 90., 95.],
    })
    areas = SimulationTable(df, TableTypeEnum.AREAS)
    print(net_load_ramp(areas).data)
    print(net_load_ramp(areas, time_step='annual').data)
