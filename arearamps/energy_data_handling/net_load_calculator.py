import pandas as pd

from arearamps.enums import TableTypeEnum
from arearamps.simulation_data.simulation_table import SimulationTable, TableTypeError, require_columns
from arearamps.units import SIMULATION_COLUMN_UNITS
from arearamps.utils.logging import get_logger

logger = get_logger(__name__)


class NetLoadCalculator:
    """Derives the net load of areas and districts from their load and non-dispatchable generation.

    The net load is the part of the consumption that has to be covered by dispatchable
    generation:

        netLoad = LOAD - ROW BAL. - PSP - MISC. NDG - H. ROR - WIND - SOLAR - mustRunTotal

    Must-run generation of thermal clusters is subtracted as well unless ignore_must_run
    is set, in which case it is treated as dispatchable.

    Args:
        non_dispatchable_columns: Columns subtracted from the load. Defaults to the
            standard area results of a simulation.
        load_column: Column containing the consumption.
        must_run_column: Column containing the total must-run generation.

    Example:

        >>> calculator = NetLoadCalculator()
        >>> areas_with_net_load = calculator.add_net_load(areas, ignore_must_run=True)
        >>> areas_with_net_load.data['netLoad']
    """
    NET_LOAD_COLUMN = 'netLoad'
    DEFAULT_NON_DISPATCHABLE_COLUMNS = ['ROW BAL.', 'PSP', 'MISC. NDG', 'H. ROR', 'WIND', 'SOLAR']

    def __init__(
            self,
            non_dispatchable_columns: list[str] = None,
            load_column: str = 'LOAD',
            must_run_column: str = 'mustRunTotal',
    ):
        self.non_dispatchable_columns = non_dispatchable_columns or list(self.DEFAULT_NON_DISPATCHABLE_COLUMNS)
        self.load_column = load_column
        self.must_run_column = must_run_column

    def get_needed_columns(self, ignore_must_run: bool = False) -> list[str]:
        needed = [self.load_column] + self.non_dispatchable_columns
        if not ignore_must_run:
            needed.append(self.must_run_column)
        return needed

    def calculate(self, df: pd.DataFrame, ignore_must_run: bool = False) -> pd.Series:
        require_columns(df, self.get_needed_columns(ignore_must_run))
        net_load = df[self.load_column] - df[self.non_dispatchable_columns].sum(axis=1, skipna=False)
        if not ignore_must_run:
            net_load = net_load - df[self.must_run_column]
        return net_load.rename(self.NET_LOAD_COLUMN)

    def add_net_load(self, table: SimulationTable, ignore_must_run: bool = False) -> SimulationTable:
        """Returns a copy of table with the additional column netLoad.

        Raises:
            TableTypeError: If table does not contain area or district data.
            MissingColumnError: If columns needed for the net load are missing.
        """
        if table.table_type not in (TableTypeEnum.AREAS, TableTypeEnum.DISTRICTS):
            raise TableTypeError(f"'table' does not contain area or district data (type {table.table_type.value}).")

        logger.debug(f'Computing netLoad for {len(table)} rows of {table.table_type.value} (ignore_must_run={ignore_must_run}).')
        result = table.copy()
        result.data[self.NET_LOAD_COLUMN] = self.calculate(table.data, ignore_must_run)
        result.units[self.NET_LOAD_COLUMN] = table.units.get(self.load_column, SIMULATION_COLUMN_UNITS[self.NET_LOAD_COLUMN])
        return result


if __name__ == '__main__':
    df = pd.DataFrame({
        'area': ['de', 'de', 'fr', 'fr'],
        'timeId': [1, 2, 1, 2],
        'LOAD': [1000., 1100., 800., 850.],
        'ROW BAL.': [0., 0., 10., 10.],
        'PSP': [0., 5., 0., 0.],
        'MISC. NDG': [20., 20., 15., 15.],
        'H. ROR': [30., 35., 100., 110.],
        'WIND': [200., 150., 50., 60.],
        'SOLAR': [0., 50., 0., 20.],
        'mustRunTotal': [100., 100., 300., 300.],
        'BALANCE': [50., 40., -50., -40.],
    })
    areas = SimulationTable(df, TableTypeEnum.AREAS)
    print(NetLoadCalculator().add_net_load(areas).data)
    print(NetLoadCalculator().add_net_load(areas, ignore_must_run=True).data)
