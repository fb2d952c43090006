from enum import Enum
from typing import Callable, Sequence

import pandas as pd

from arearamps.enums import TimeStepEnum, QuantityTypeEnum
from arearamps.simulation_data.simulation_options import SimulationOptions
from arearamps.simulation_data.simulation_table import SimulationTable, require_columns, TIME_ID_COLUMN
from arearamps.units import Units, UnitNotFound
from arearamps.utils.logging import get_logger

logger = get_logger(__name__)

AggregatorType = str | Callable[[pd.Series], float]


class TimeStepConversionError(Exception):
    """Exception raised when a table cannot be converted to the requested time step.

    Raised for conversions towards a finer time step and for aggregator lists that
    do not match the value columns of the table.
    """
    pass


class SamplingMethodEnum(Enum):
    """Enumeration of sampling methods for time step conversion.

    Attributes:
        UPSAMPLING: Converting from coarser to finer time step (e.g., daily to hourly)
        DOWNSAMPLING: Converting from finer to coarser time step (e.g., hourly to daily)
        KEEP: No conversion needed - source and target time steps are the same
    """
    UPSAMPLING = 'upsampling'
    DOWNSAMPLING = 'downsampling'
    KEEP = 'keep'


class TimeStepConverter:
    """Aggregates simulation tables from a fine to a coarse time step.

    Each timeId of the source table is mapped onto the calendar period it falls into at the
    target time step, using the start date and the first weekday of the simulation. All
    rows of one series (same area / district / mcYear) within a period are aggregated into
    one row; every value column gets its own aggregator.

    Period numbering at the target time step:
        - daily: days since the simulation start, starting at 1
        - weekly: 7-day blocks aligned with the first weekday; a partial first week is week 1
        - monthly: calendar months since the simulation start, starting at 1
        - annual: a single period with timeId 1

    If no aggregators are given, they follow the physical nature of the columns: intensive
    quantities (power, ramps) are averaged, extensive quantities (energy) are summed.
    Columns without a registered unit are averaged.

    Example:

        >>> converter = TimeStepConverter()
        >>> daily = converter.change_time_step(hourly_table, 'daily', fun=['mean', 'min', 'max'])
    """
    _TIME_ID_FREQUENCIES = {
        TimeStepEnum.HOURLY: pd.Timedelta(hours=1),
        TimeStepEnum.DAILY: pd.Timedelta(days=1),
        TimeStepEnum.WEEKLY: pd.Timedelta(days=7),
    }
    TIME_COLUMN = 'time'

    def change_time_step(
            self,
            table: SimulationTable,
            time_step: TimeStepEnum | str,
            fun: AggregatorType | Sequence[AggregatorType] = None,
            options: SimulationOptions = None,
    ) -> SimulationTable:
        target = TimeStepEnum.from_value(time_step)
        sampling = self._get_sampling_method(table.time_step, target)

        if sampling == SamplingMethodEnum.KEEP:
            return table.copy()
        if sampling == SamplingMethodEnum.UPSAMPLING:
            raise TimeStepConversionError(
                f'Cannot convert data from {table.time_step.value} to the finer time step {target.value}.'
            )

        options = options or table.options or SimulationOptions()
        df = table.data
        require_columns(df, [TIME_ID_COLUMN])

        value_cols = table.value_columns
        aggregators = self._resolve_aggregators(table, value_cols, fun)
        entity_cols = table.entity_columns

        period_starts = self.get_period_starts(df[TIME_ID_COLUMN], table.time_step, options)
        new_time_ids = self.get_time_ids(period_starts, target, options)

        tmp = df[entity_cols + value_cols].copy()
        tmp[TIME_ID_COLUMN] = new_time_ids.values
        group_cols = entity_cols + [TIME_ID_COLUMN]

        result = (
            tmp
            .groupby(group_cols, sort=True, dropna=False)
            .agg({c: agg for c, agg in zip(value_cols, aggregators)})
            .reset_index()
        )
        result.insert(
            len(group_cols),
            self.TIME_COLUMN,
            self.get_period_starts(result[TIME_ID_COLUMN], target, options).values
        )

        logger.debug(f'Converted {len(df)} {table.time_step.value} rows into {len(result)} {target.value} rows.')
        return table.with_attributes(data=result[group_cols + [self.TIME_COLUMN] + value_cols], time_step=target)

    @staticmethod
    def _get_sampling_method(source: TimeStepEnum, target: TimeStepEnum) -> SamplingMethodEnum:
        if target.rank > source.rank:
            return SamplingMethodEnum.DOWNSAMPLING
        elif target.rank < source.rank:
            return SamplingMethodEnum.UPSAMPLING
        return SamplingMethodEnum.KEEP

    def _resolve_aggregators(
            self,
            table: SimulationTable,
            value_cols: list[str],
            fun: AggregatorType | Sequence[AggregatorType] | None
    ) -> list[AggregatorType]:
        if fun is None:
            return [self._get_default_aggregator(table, c) for c in value_cols]
        if isinstance(fun, str) or callable(fun):
            return [fun] * len(value_cols)

        fun = list(fun)
        if len(fun) == 1:
            return fun * len(value_cols)
        if len(fun) != len(value_cols):
            raise TimeStepConversionError(
                f'Got {len(fun)} aggregation functions for {len(value_cols)} value columns {value_cols}.'
            )
        return fun

    @staticmethod
    def _get_default_aggregator(table: SimulationTable, column: str) -> str:
        unit = table.units.get(column)
        if unit is None:
            return 'mean'
        try:
            quantity_type = Units.get_quantity_type_enum(unit)
        except UnitNotFound:
            logger.warning(f'No quantity type registered for unit {unit} of column {column}. Using mean.')
            return 'mean'
        return 'sum' if quantity_type == QuantityTypeEnum.EXTENSIVE else 'mean'

    def get_period_starts(
            self,
            time_ids: pd.Series,
            time_step: TimeStepEnum,
            options: SimulationOptions
    ) -> pd.Series:
        """Start timestamp of the period identified by each timeId, never before the simulation start."""
        start = options.start
        offsets = time_ids.astype('int64') - 1

        if time_step == TimeStepEnum.HOURLY:
            starts = start + offsets * self._TIME_ID_FREQUENCIES[TimeStepEnum.HOURLY]
        elif time_step == TimeStepEnum.DAILY:
            starts = start.normalize() + offsets * self._TIME_ID_FREQUENCIES[TimeStepEnum.DAILY]
        elif time_step == TimeStepEnum.WEEKLY:
            starts = options.week_origin + offsets * self._TIME_ID_FREQUENCIES[TimeStepEnum.WEEKLY]
        elif time_step == TimeStepEnum.MONTHLY:
            first_month = start.to_period('M')
            starts = pd.to_datetime(offsets.map(lambda o: (first_month + int(o)).to_timestamp()))
        else:
            starts = pd.Series(start, index=time_ids.index)

        starts = pd.Series(starts, index=time_ids.index)
        return starts.where(starts >= start, start)

    @staticmethod
    def get_time_ids(
            timestamps: pd.Series,
            time_step: TimeStepEnum,
            options: SimulationOptions
    ) -> pd.Series:
        """timeId at the given time step of the period each timestamp falls into."""
        start = options.start

        if time_step == TimeStepEnum.HOURLY:
            ids = (timestamps - start) // pd.Timedelta(hours=1)
        elif time_step == TimeStepEnum.DAILY:
            ids = (timestamps.dt.normalize() - start.normalize()).dt.days
        elif time_step == TimeStepEnum.WEEKLY:
            ids = (timestamps.dt.normalize() - options.week_origin).dt.days // 7
        elif time_step == TimeStepEnum.MONTHLY:
            ids = (timestamps.dt.year - start.year) * 12 + (timestamps.dt.month - start.month)
        else:
            ids = pd.Series(0, index=timestamps.index)

        return (ids + 1).astype('int64')


if __name__ == '__main__':
    import numpy as np
    from arearamps.enums import TableTypeEnum

    hours = 24 * 62
    df = pd.DataFrame({
        'area': 'de',
        'timeId': np.arange(1, hours + 1),
        'BALANCE': np.random.uniform(-100, 100, hours),
    })
    table = SimulationTable(df, TableTypeEnum.AREAS, units={'BALANCE': Units.MWh})
    converter = TimeStepConverter()
    for ts in ['daily', 'weekly', 'monthly', 'annual']:
        print(converter.change_time_step(table, ts).data.head())
