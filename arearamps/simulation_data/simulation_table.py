from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Iterable

import pandas as pd
from pint import Unit

from arearamps.enums import TableTypeEnum, TimeStepEnum
from arearamps.simulation_data.simulation_options import SimulationOptions

ID_COLUMNS = ['area', 'district', 'link', 'cluster', 'mcYear', 'timeId', 'time', 'day', 'week', 'month', 'hour']
TIME_COLUMNS = ['timeId', 'time', 'day', 'week', 'month', 'hour']
SCENARIO_COLUMN = 'mcYear'
TIME_ID_COLUMN = 'timeId'


class MissingColumnError(ValueError):
    pass


class TableTypeError(ValueError):
    pass


class InvalidTableAttributesError(ValueError):
    pass


def id_columns(df: pd.DataFrame) -> list[str]:
    """Identifier columns present in df, in canonical order (entities, mcYear, time columns)."""
    return [c for c in ID_COLUMNS if c in df.columns]


def entity_columns(df: pd.DataFrame) -> list[str]:
    """Identifier columns that define a single series, i.e. all non-time identifier columns."""
    return [c for c in id_columns(df) if c not in TIME_COLUMNS]


def require_columns(df: pd.DataFrame, columns: Iterable[str]):
    missing = [c for c in columns if c not in df.columns]
    if len(missing) == 1:
        raise MissingColumnError(f"Column '{missing[0]}' is needed but missing.")
    if missing:
        raise MissingColumnError(f"The following columns are needed but missing: {', '.join(missing)}")


@dataclass
class SimulationTable:
    """
    Time series of one object class (areas, districts, ...) of a simulation.

    Every row is identified by its identifier columns (see ID_COLUMNS), e.g. area, mcYear
    and timeId. All other columns are numeric results. The metadata attributes describe
    the resolution of timeId and whether the scenario dimension (mcYear) was already
    collapsed.

    Example:

        >>> df = pd.DataFrame({
        ...     'area': ['a', 'a'], 'timeId': [1, 2], 'BALANCE': [10., 15.], 'netLoad': [100., 90.]
        ... })
        >>> table = SimulationTable(df, TableTypeEnum.AREAS)
        >>> table.id_columns
            ['area', 'timeId']
        >>> table.value_columns
            ['BALANCE', 'netLoad']
    """
    data: pd.DataFrame
    table_type: TableTypeEnum
    time_step: TimeStepEnum = TimeStepEnum.HOURLY
    synthesis: bool = False
    options: SimulationOptions | None = None
    units: dict[str, Unit] = field(default_factory=dict)

    def __post_init__(self):
        if not isinstance(self.table_type, TableTypeEnum):
            self.table_type = TableTypeEnum(self.table_type)
        self.time_step = TimeStepEnum.from_value(self.time_step)

    @property
    def id_columns(self) -> list[str]:
        return id_columns(self.data)

    @property
    def entity_columns(self) -> list[str]:
        return entity_columns(self.data)

    @property
    def value_columns(self) -> list[str]:
        return [c for c in self.data.columns if c not in ID_COLUMNS]

    def has_column(self, column: str) -> bool:
        return column in self.data.columns

    @property
    def attributes(self) -> dict:
        return {
            'type': self.table_type.value,
            'timeStep': self.time_step.value,
            'synthesis': self.synthesis,
        }

    def copy(self) -> SimulationTable:
        return replace(self, data=self.data.copy(), units=self.units.copy())

    def with_data(self, data: pd.DataFrame) -> SimulationTable:
        """New table with the given data; units are kept for the columns that remain."""
        units = {c: u for c, u in self.units.items() if c in data.columns}
        return replace(self, data=data, units=units)

    def with_attributes(self, **kwargs) -> SimulationTable:
        return replace(self, **kwargs)

    def __len__(self) -> int:
        return len(self.data)


@dataclass
class SimulationTableCollection:
    """
    Container for the tables of several object classes read from the same simulation.

    Any of the sub-tables may be absent. The collection carries the metadata shared by
    its sub-tables.
    """
    areas: SimulationTable | None = None
    districts: SimulationTable | None = None
    links: SimulationTable | None = None
    time_step: TimeStepEnum = TimeStepEnum.HOURLY
    synthesis: bool = False
    options: SimulationOptions | None = None

    def __post_init__(self):
        self.time_step = TimeStepEnum.from_value(self.time_step)

    @property
    def tables(self) -> dict[str, SimulationTable]:
        candidates = {'areas': self.areas, 'districts': self.districts, 'links': self.links}
        return {name: table for name, table in candidates.items() if table is not None}

    @property
    def is_empty_of_areas_and_districts(self) -> bool:
        return self.areas is None and self.districts is None

    @property
    def attributes(self) -> dict:
        return {'timeStep': self.time_step.value, 'synthesis': self.synthesis}

    def __len__(self) -> int:
        return len(self.tables)


def add_class_and_attributes(
        data: SimulationTable | SimulationTableCollection,
        synthesis: bool,
        time_step: TimeStepEnum | str,
        options: SimulationOptions | None,
        table_type: TableTypeEnum | None = None,
) -> SimulationTable | SimulationTableCollection:
    """Returns a new table / collection tagged with the given metadata.

    For collections, the sub-tables get the same time step, synthesis flag and options;
    their table type is kept.
    """
    time_step = TimeStepEnum.from_value(time_step)

    if isinstance(data, SimulationTableCollection):
        tagged = {
            name: add_class_and_attributes(table, synthesis, time_step, options)
            for name, table in data.tables.items()
        }
        return SimulationTableCollection(**tagged, time_step=time_step, synthesis=synthesis, options=options)

    attributes = dict(synthesis=synthesis, time_step=time_step, options=options)
    if table_type is not None:
        attributes['table_type'] = TableTypeEnum(table_type)
    return data.with_attributes(**attributes)


def check_attributes(
        data: SimulationTable | SimulationTableCollection,
        time_step: TimeStepEnum | str | None = TimeStepEnum.HOURLY,
        synthesis: bool | None = False
):
    """Raises InvalidTableAttributesError if data does not have the required time step / synthesis flag."""
    tables = [data]
    if isinstance(data, SimulationTableCollection):
        tables += list(data.tables.values())

    for t in tables:
        if time_step is not None and t.time_step != TimeStepEnum.from_value(time_step):
            raise InvalidTableAttributesError(
                f'Impossible to use this function with {t.time_step.value} time step, '
                f'only {TimeStepEnum.from_value(time_step).value} is supported.'
            )
        if synthesis is not None and t.synthesis != synthesis:
            kind = 'synthetic' if synthesis else 'detailed (mcYear-level)'
            raise InvalidTableAttributesError(f'Impossible to use this function, data must be {kind}.')
