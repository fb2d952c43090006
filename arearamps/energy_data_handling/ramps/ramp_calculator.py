import pandas as pd

from arearamps.config import RampConfig
from arearamps.energy_data_handling.net_load_calculator import NetLoadCalculator
from arearamps.enums import BoundaryModeEnum, TableTypeEnum, TimeStepEnum
from arearamps.simulation_data.simulation_options import SimulationOptions
from arearamps.simulation_data.simulation_table import (
    SimulationTable,
    add_class_and_attributes,
    require_columns,
    TIME_ID_COLUMN,
)
from arearamps.units import Units, UnitNotFound, get_column_unit
from arearamps.utils.logging import get_logger

logger = get_logger(__name__)


class RampCalculator:
    """Computes hourly ramps of the net load and the balance of areas or districts.

    A ramp is the change of a quantity from one hour to the next:

        netLoadRamp = netLoad - previous netLoad
        balanceRamp = BALANCE - previous BALANCE
        areaRamp    = netLoadRamp + balanceRamp

    Rows are sorted by their identifier columns (area / district, mcYear, timeId), so that
    every series is a contiguous block ordered by time. The first row of each series has no
    predecessor and gets ramps of 0. Which rows count as first rows depends on the
    boundary mode of the config:

        - PER_ENTITY: the first row of every area / district / mcYear series.
        - GLOBAL_MIN_TIME_ID: every row whose timeId equals the minimum timeId of the whole
          table. Only correct if all series start at the same timeId.

    If the table has no netLoad column, it is derived with the NetLoadCalculator on a copy
    of the input; the input table itself is never modified.

    Args:
        config: Ramp settings; defaults to RampConfig().
        net_load_calculator: Used when netLoad has to be derived.

    Example:

        >>> calculator = RampCalculator()
        >>> ramps = calculator.calculate(areas)
        >>> ramps.value_columns
            ['netLoadRamp', 'balanceRamp', 'areaRamp']
    """
    BALANCE_COLUMN = 'BALANCE'
    NET_LOAD_COLUMN = NetLoadCalculator.NET_LOAD_COLUMN
    NET_LOAD_RAMP = 'netLoadRamp'
    BALANCE_RAMP = 'balanceRamp'
    AREA_RAMP = 'areaRamp'
    RAMP_COLUMNS = [NET_LOAD_RAMP, BALANCE_RAMP, AREA_RAMP]

    def __init__(self, config: RampConfig = None, net_load_calculator: NetLoadCalculator = None):
        self.config = config or RampConfig()
        self.net_load_calculator = net_load_calculator or NetLoadCalculator()

    def prepare_input(self, table: SimulationTable, ignore_must_run: bool = False) -> SimulationTable:
        """Returns the input of the ramp computation: table with a netLoad column.

        Raises:
            MissingColumnError: If BALANCE or timeId is missing, or netLoad is missing and
                cannot be derived.
        """
        require_columns(table.data, [self.BALANCE_COLUMN, TIME_ID_COLUMN])
        if table.has_column(self.NET_LOAD_COLUMN):
            return table
        logger.info(f'Column {self.NET_LOAD_COLUMN} missing in {table.table_type.value}. Deriving it.')
        return self.net_load_calculator.add_net_load(table, ignore_must_run)

    def calculate(
            self,
            table: SimulationTable,
            ignore_must_run: bool = False,
            options: SimulationOptions = None
    ) -> SimulationTable:
        table = self.prepare_input(table, ignore_must_run)

        id_cols = table.id_columns
        entity_cols = table.entity_columns
        values = [self.NET_LOAD_COLUMN, self.BALANCE_COLUMN]

        df = (
            table.data[id_cols + values]
            .sort_values(id_cols, kind='mergesort')
            .reset_index(drop=True)
        )

        if df.empty:
            ramps = pd.DataFrame(columns=[self.NET_LOAD_RAMP, self.BALANCE_RAMP], dtype=float)
        elif self.config.boundary_mode == BoundaryModeEnum.GLOBAL_MIN_TIME_ID:
            ramps = self._diff_with_global_min_time_id_reset(df, values)
        else:
            ramps = self._diff_per_entity(df, values, entity_cols)

        result = df[id_cols].copy()
        result[self.NET_LOAD_RAMP] = ramps[self.NET_LOAD_RAMP]
        result[self.BALANCE_RAMP] = ramps[self.BALANCE_RAMP]
        result[self.AREA_RAMP] = result[self.NET_LOAD_RAMP] + result[self.BALANCE_RAMP]

        ramp_table = table.with_data(result)
        ramp_unit = self._get_ramp_unit(table)
        ramp_table.units = {c: ramp_unit for c in self.RAMP_COLUMNS}
        return add_class_and_attributes(
            ramp_table,
            synthesis=False,
            time_step=TimeStepEnum.HOURLY,
            options=options or table.options,
            table_type=TableTypeEnum.NET_LOAD_RAMP,
        )

    def _get_ramp_unit(self, table: SimulationTable):
        try:
            return Units.get_ramp_unit(get_column_unit(self.NET_LOAD_COLUMN, table.units))
        except UnitNotFound as e:
            logger.warning(f'{e} Assuming {Units.MW_per_hour}.')
            return Units.MW_per_hour

    def _rename_to_ramps(self, df: pd.DataFrame) -> pd.DataFrame:
        return df.rename(columns={self.NET_LOAD_COLUMN: self.NET_LOAD_RAMP, self.BALANCE_COLUMN: self.BALANCE_RAMP})

    def _diff_with_global_min_time_id_reset(self, df: pd.DataFrame, values: list[str]) -> pd.DataFrame:
        ramps = df[values] - df[values].shift(1, fill_value=0)
        ramps.loc[df[TIME_ID_COLUMN] == df[TIME_ID_COLUMN].min(), values] = 0
        return self._rename_to_ramps(ramps)

    def _diff_per_entity(self, df: pd.DataFrame, values: list[str], entity_cols: list[str]) -> pd.DataFrame:
        if entity_cols:
            grouped = df.groupby(entity_cols, sort=False, dropna=False)
            previous = grouped[values].shift(1)
            is_first_row = grouped.cumcount() == 0
        else:
            previous = df[values].shift(1)
            is_first_row = pd.Series(df.index == df.index[0], index=df.index)

        ramps = df[values] - previous
        ramps.loc[is_first_row, values] = 0
        return self._rename_to_ramps(ramps)


if __name__ == '__main__':
    df = pd.DataFrame({
        'area': ['a', 'a', 'a', 'b', 'b', 'b'],
        'timeId': [1, 2, 3, 1, 2, 3],
        'BALANCE': [10., 15., 5., 0., 3., 1.],
        'netLoad': [100., 90., 95., 50., 60., 40.],
    })
    print(RampCalculator().calculate(SimulationTable(df, TableTypeEnum.AREAS)).data)
