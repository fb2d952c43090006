"""Tests for bringing hourly ramps to coarser time steps and synthesizing them."""

import pandas as pd
import pytest

from arearamps.energy_data_handling.ramps import RampCalculator, RampResampler
from arearamps.enums import TableTypeEnum, TimeStepEnum
from arearamps.simulation_data import SimulationTable
from arearamps.units import Units

EXPECTED_VALUE_COLUMNS = [
    'avg_netLoadRamp', 'min_netLoadRamp', 'max_netLoadRamp',
    'avg_balanceRamp', 'min_balanceRamp', 'max_balanceRamp',
    'avg_areaRamp', 'min_areaRamp', 'max_areaRamp',
]


@pytest.fixture
def mc_ramps() -> SimulationTable:
    df = pd.DataFrame({
        'area': ['a', 'a', 'a', 'a'],
        'mcYear': [1, 1, 2, 2],
        'timeId': [1, 2, 1, 2],
        'netLoadRamp': [0., 4., 0., 8.],
        'balanceRamp': [0., -2., 0., 2.],
        'areaRamp': [0., 2., 0., 10.],
    })
    units = {c: Units.MW_per_hour for c in RampCalculator.RAMP_COLUMNS}
    return SimulationTable(df, TableTypeEnum.NET_LOAD_RAMP, units=units)


def test_hourly_without_synthesis_is_passed_through(example_areas):
    ramps = RampCalculator().calculate(example_areas)
    assert RampResampler().resample(ramps, 'hourly', synthesis=False) is ramps


def test_annual_resampling_yields_mean_min_max_per_ramp(example_areas):
    ramps = RampCalculator().calculate(example_areas)
    result = RampResampler().resample(ramps, 'annual', synthesis=False)

    assert result.time_step == TimeStepEnum.ANNUAL
    assert result.value_columns == EXPECTED_VALUE_COLUMNS
    assert len(result.data.columns) == len(result.id_columns) + 9

    row = result.data.iloc[0]
    assert len(result.data) == 1
    assert row['avg_netLoadRamp'] == pytest.approx(-5 / 3)
    assert row['min_netLoadRamp'] == -10
    assert row['max_netLoadRamp'] == 5
    assert row['avg_balanceRamp'] == pytest.approx(-5 / 3)
    assert row['min_balanceRamp'] == -10
    assert row['max_balanceRamp'] == 5
    assert row['avg_areaRamp'] == pytest.approx(-10 / 3)
    assert row['min_areaRamp'] == -5
    assert row['max_areaRamp'] == 0


def test_daily_resampling_keeps_every_series(mc_areas):
    ramps = RampCalculator().calculate(mc_areas)
    result = RampResampler().resample(ramps, 'daily', synthesis=False)

    assert result.id_columns == ['area', 'mcYear', 'timeId', 'time']
    assert result.value_columns == EXPECTED_VALUE_COLUMNS
    assert len(result) == 2 * 2 * 2
    assert sorted(result.data['timeId'].unique()) == [1, 2]


def test_resampled_columns_keep_ramp_units(example_areas):
    ramps = RampCalculator().calculate(example_areas)
    result = RampResampler().resample(ramps, 'daily', synthesis=False)

    assert set(result.units) == set(EXPECTED_VALUE_COLUMNS)
    assert all(u == Units.MW_per_hour for u in result.units.values())


def test_hourly_synthesis_collapses_mc_years(mc_ramps):
    result = RampResampler().resample(mc_ramps, 'hourly', synthesis=True)
    df = result.data.set_index('timeId')

    assert result.synthesis is True
    assert 'mcYear' not in result.data.columns
    assert result.value_columns == EXPECTED_VALUE_COLUMNS
    assert df.loc[2, 'avg_netLoadRamp'] == 6
    assert df.loc[2, 'min_netLoadRamp'] == 4
    assert df.loc[2, 'max_netLoadRamp'] == 8
    assert df.loc[2, 'avg_balanceRamp'] == 0
    assert df.loc[2, 'max_areaRamp'] == 10
    assert (df.loc[1, EXPECTED_VALUE_COLUMNS] == 0).all()


def test_daily_synthesis_aggregates_statistics_consistently(mc_ramps):
    result = RampResampler().resample(mc_ramps, 'daily', synthesis=True)
    row = result.data.iloc[0]

    assert len(result) == 1
    assert result.value_columns == EXPECTED_VALUE_COLUMNS
    assert row['avg_netLoadRamp'] == 3
    assert row['min_netLoadRamp'] == 0
    assert row['max_netLoadRamp'] == 8
    assert row['avg_areaRamp'] == 3
    assert row['min_areaRamp'] == 0
    assert row['max_areaRamp'] == 10


def test_custom_mean_prefix(example_areas):
    ramps = RampCalculator().calculate(example_areas)
    result = RampResampler(mean_prefix='mean').resample(ramps, 'weekly', synthesis=False)

    assert result.value_columns[:3] == ['mean_netLoadRamp', 'min_netLoadRamp', 'max_netLoadRamp']
