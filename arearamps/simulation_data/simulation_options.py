from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import pandas as pd

from arearamps.enums import WeekdayEnum
from arearamps.utils.logging import get_logger

if TYPE_CHECKING:
    from arearamps.simulation_data.simulation_table import SimulationTable, SimulationTableCollection

logger = get_logger(__name__)


@dataclass
class SimulationOptions:
    """
    Context of the simulation a table was read from.

    The options are needed whenever timeIds have to be mapped onto calendar periods
    (changing the time step) and travel with the tables as metadata.

    Attributes:
        study_name: Human-readable identifier of the study.
        start: Timestamp of timeId 1 at hourly resolution.
        first_weekday: Weekday on which simulation weeks begin.
        cluster_description: Optional description of the thermal clusters of the study.
    """
    study_name: str = 'study'
    start: pd.Timestamp = field(default_factory=lambda: pd.Timestamp('2018-01-01'))
    first_weekday: WeekdayEnum = WeekdayEnum.Monday
    cluster_description: pd.DataFrame | None = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        self.start = pd.Timestamp(self.start)
        if not isinstance(self.first_weekday, WeekdayEnum):
            self.first_weekday = WeekdayEnum[self.first_weekday]

    @property
    def week_origin(self) -> pd.Timestamp:
        """Start of the (possibly partial) first simulation week."""
        start_day = self.start.normalize()
        offset_days = (start_day.weekday() - self.first_weekday.value) % 7
        return start_day - pd.Timedelta(days=offset_days)


def resolve_simulation_options(
        data: SimulationTable | SimulationTableCollection,
        options: SimulationOptions | None = None
) -> SimulationOptions:
    """Returns the given options, else the ones attached to data, else default options."""
    if options is not None:
        return options

    if data.options is not None:
        return data.options

    from arearamps.simulation_data.simulation_table import SimulationTableCollection
    if isinstance(data, SimulationTableCollection):
        for table in data.tables.values():
            if table.options is not None:
                return table.options

    logger.info('No simulation options attached to data. Falling back to default SimulationOptions.')
    return SimulationOptions()
