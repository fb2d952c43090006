import re
from typing import Callable

import pandas as pd

from arearamps.simulation_data.simulation_table import (
    SimulationTable,
    id_columns,
    require_columns,
    SCENARIO_COLUMN,
    TIME_ID_COLUMN,
)
from arearamps.utils.logging import get_logger

logger = get_logger(__name__)

StatisticType = str | Callable[[pd.Series], float]


class ScenarioSynthesizer:
    """Collapses the scenario dimension (mcYear) of a simulation table into summary statistics.

    For every value column x the synthesis contains the mean over all Monte-Carlo years,
    followed by one column per requested statistic, named {statistic}_x. Rows are grouped
    by all remaining identifier columns, so the result keeps one row per area / district
    and time step.

    Supported statistics: 'min', 'max', 'median', 'std', quantiles given as 'qNN'
    (e.g. 'q10' for the 10 % quantile) and callables, which are named after __name__.

    Example:

        >>> synthesizer = ScenarioSynthesizer()
        >>> synthesis = synthesizer.synthesize(table, 'min', 'max', prefix_for_means='avg')
        >>> synthesis.value_columns
            ['avg_BALANCE', 'min_BALANCE', 'max_BALANCE']
    """
    _QUANTILE_PATTERN = re.compile(r'^q(\d{1,2})$')
    _NAMED_STATISTICS = ['min', 'max', 'median', 'std']

    def synthesize(
            self,
            table: SimulationTable,
            *statistics: StatisticType,
            prefix_for_means: str = '',
    ) -> SimulationTable:
        df = table.data
        group_cols = [c for c in id_columns(df) if c != SCENARIO_COLUMN]
        value_cols = table.value_columns

        if SCENARIO_COLUMN not in df.columns:
            logger.warning(
                f"Table of type {table.table_type.value} has no '{SCENARIO_COLUMN}' column. "
                f"Treating it as a single scenario."
            )

        require_columns(df, [TIME_ID_COLUMN])
        named_statistics = [(self._get_statistic_name(s), self._get_statistic_function(s)) for s in statistics]
        aggregations = {}
        for c in value_cols:
            aggregations[self._get_mean_column_name(c, prefix_for_means)] = (c, 'mean')
            for name, func in named_statistics:
                aggregations[f'{name}_{c}'] = (c, func)
        ordered_columns = list(aggregations)

        result = (
            df
            .groupby(group_cols, sort=True, dropna=False)
            .agg(**aggregations)
            .reset_index()
        )

        units = {}
        for c in value_cols:
            if c in table.units:
                units[self._get_mean_column_name(c, prefix_for_means)] = table.units[c]
                units.update({f'{name}_{c}': table.units[c] for name, _ in named_statistics})

        return table.with_attributes(data=result[group_cols + ordered_columns], synthesis=True, units=units)

    @staticmethod
    def _get_mean_column_name(column: str, prefix_for_means: str) -> str:
        return f'{prefix_for_means}_{column}' if prefix_for_means else column

    def _get_statistic_name(self, statistic: StatisticType) -> str:
        if isinstance(statistic, str):
            return statistic
        return statistic.__name__

    def _get_statistic_function(self, statistic: StatisticType):
        if callable(statistic):
            return statistic
        if statistic in self._NAMED_STATISTICS:
            return statistic
        match = self._QUANTILE_PATTERN.match(statistic)
        if match:
            q = int(match.group(1)) / 100
            return lambda s: s.quantile(q)
        raise ValueError(
            f"Statistic {statistic!r} not supported. "
            f"Use one of {self._NAMED_STATISTICS}, 'qNN' for quantiles or a callable."
        )


if __name__ == '__main__':
    import numpy as np

    df = pd.DataFrame({
        'area': ['de'] * 6,
        'mcYear': [1, 1, 1, 2, 2, 2],
        'timeId': [1, 2, 3, 1, 2, 3],
        'BALANCE': np.random.uniform(-100, 100, 6),
    })
    from arearamps.enums import TableTypeEnum
    synthesis = ScenarioSynthesizer().synthesize(
        SimulationTable(df, TableTypeEnum.AREAS), 'min', 'max', 'q90', prefix_for_means='avg'
    )
    print(synthesis.data)
