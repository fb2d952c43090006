import numpy as np
import pandas as pd
import pytest

from arearamps.enums import TableTypeEnum
from arearamps.simulation_data import SimulationTable, SimulationOptions
from arearamps.units import SIMULATION_COLUMN_UNITS


@pytest.fixture
def example_areas() -> SimulationTable:
    df = pd.DataFrame({
        'area': ['a', 'a', 'a'],
        'timeId': [1, 2, 3],
        'BALANCE': [10., 15., 5.],
        'netLoad': [100., 90., 95.],
    })
    return SimulationTable(df, TableTypeEnum.AREAS)


@pytest.fixture
def mc_areas() -> SimulationTable:
    """Two areas, two Monte-Carlo years, two days of hourly data."""
    rng = np.random.default_rng(42)
    rows = []
    for area in ['de', 'fr']:
        for mc_year in [1, 2]:
            for time_id in range(1, 49):
                rows.append({
                    'area': area,
                    'mcYear': mc_year,
                    'timeId': time_id,
                    'BALANCE': rng.uniform(-500, 500),
                    'netLoad': rng.uniform(1000, 5000),
                })
    return SimulationTable(
        pd.DataFrame(rows),
        TableTypeEnum.AREAS,
        options=SimulationOptions(study_name='mc_study', start='2018-01-01'),
    )


@pytest.fixture
def raw_areas() -> SimulationTable:
    """Area results without netLoad, which has to be derived from its components."""
    df = pd.DataFrame({
        'area': ['de', 'de', 'de'],
        'timeId': [1, 2, 3],
        'LOAD': [1000., 1100., 1050.],
        'ROW BAL.': [0., 0., 0.],
        'PSP': [0., 10., 0.],
        'MISC. NDG': [20., 20., 20.],
        'H. ROR': [30., 30., 40.],
        'WIND': [200., 150., 100.],
        'SOLAR': [0., 50., 100.],
        'mustRunTotal': [100., 100., 100.],
        'BALANCE': [50., 40., 70.],
    })
    units = {c: u for c, u in SIMULATION_COLUMN_UNITS.items() if c in df.columns}
    return SimulationTable(df, TableTypeEnum.AREAS, units=units)
