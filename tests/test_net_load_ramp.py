"""Tests for the net load ramp entry point on tables and collections."""

import pandas as pd
import pytest

from arearamps import (
    net_load_ramp,
    NetLoadRampCalculator,
    RampConfig,
    SimulationOptions,
    SimulationTable,
    SimulationTableCollection,
    TableTypeEnum,
    TimeStepEnum,
)
from arearamps.simulation_data import InvalidTableAttributesError, MissingColumnError, TableTypeError


@pytest.fixture
def districts(example_areas) -> SimulationTable:
    df = example_areas.data.rename(columns={'area': 'district'})
    return SimulationTable(df, TableTypeEnum.DISTRICTS)


@pytest.fixture
def links() -> SimulationTable:
    df = pd.DataFrame({'link': ['a - b'] * 2, 'timeId': [1, 2], 'FLOW LIN.': [10., -5.]})
    return SimulationTable(df, TableTypeEnum.LINKS)


def test_hourly_ramps_of_table(example_areas):
    result = net_load_ramp(example_areas)

    assert isinstance(result, SimulationTable)
    assert result.table_type == TableTypeEnum.NET_LOAD_RAMP
    assert result.attributes == {'type': 'netLoadRamp', 'timeStep': 'hourly', 'synthesis': False}
    assert result.value_columns == ['netLoadRamp', 'balanceRamp', 'areaRamp']
    assert result.data['areaRamp'].tolist() == [0, -5, -5]


def test_time_step_given_as_string(example_areas):
    result = net_load_ramp(example_areas, time_step='ANNUAL')
    assert result.time_step == TimeStepEnum.ANNUAL
    assert result.data['avg_areaRamp'].iloc[0] == pytest.approx(-10 / 3)


def test_synthesis_of_mc_years(mc_areas):
    result = net_load_ramp(mc_areas, time_step='daily', synthesis=True)

    assert result.synthesis is True
    assert result.id_columns == ['area', 'timeId', 'time']
    assert len(result) == 2 * 2
    assert len(result.value_columns) == 9


def test_collection_with_areas_and_districts(example_areas, districts, links):
    data = SimulationTableCollection(areas=example_areas, districts=districts, links=links)
    result = net_load_ramp(data, time_step='weekly')

    assert isinstance(result, SimulationTableCollection)
    assert set(result.tables) == {'areas', 'districts'}
    assert result.time_step == TimeStepEnum.WEEKLY
    assert result.synthesis is False
    assert result.attributes == {'timeStep': 'weekly', 'synthesis': False}
    for table in result.tables.values():
        assert table.table_type == TableTypeEnum.NET_LOAD_RAMP
        assert table.time_step == TimeStepEnum.WEEKLY
    assert 'district' in result.districts.data.columns


def test_collection_with_districts_only(districts):
    result = net_load_ramp(SimulationTableCollection(districts=districts))

    assert result.areas is None
    assert result.districts is not None
    assert result.districts.data['netLoadRamp'].tolist() == [0, -10, 5]


def test_collection_without_areas_and_districts_raises(links):
    with pytest.raises(TableTypeError, match='does not contain area or district data'):
        net_load_ramp(SimulationTableCollection(links=links))

    with pytest.raises(TableTypeError):
        net_load_ramp(SimulationTableCollection())


def test_links_table_raises(links):
    with pytest.raises(TableTypeError):
        net_load_ramp(links)


def test_unsupported_input_type_raises(example_areas):
    with pytest.raises(TypeError):
        net_load_ramp(example_areas.data)


def test_missing_balance_raises(example_areas):
    table = example_areas.with_data(example_areas.data.drop(columns=['BALANCE']))
    with pytest.raises(MissingColumnError):
        net_load_ramp(table)


def test_non_hourly_input_raises(example_areas):
    daily = example_areas.with_attributes(time_step=TimeStepEnum.DAILY)
    with pytest.raises(InvalidTableAttributesError, match='only hourly is supported'):
        net_load_ramp(daily)


def test_synthetic_input_raises(example_areas):
    with pytest.raises(InvalidTableAttributesError, match='detailed'):
        net_load_ramp(example_areas.with_attributes(synthesis=True))


def test_sub_table_attributes_are_checked(example_areas, districts):
    data = SimulationTableCollection(areas=example_areas, districts=districts.with_attributes(synthesis=True))
    with pytest.raises(InvalidTableAttributesError):
        net_load_ramp(data)


def test_attribute_check_can_be_disabled(example_areas):
    synthetic = example_areas.with_attributes(synthesis=True)
    result = net_load_ramp(synthetic, config={'check_input_attributes': False})
    assert result.data['netLoadRamp'].tolist() == [0, -10, 5]


def test_explicit_options_are_attached(example_areas):
    options = SimulationOptions(study_name='explicit', start='2030-01-01')
    result = net_load_ramp(example_areas, time_step='daily', options=options)

    assert result.options is options
    assert result.data['time'].iloc[0] == pd.Timestamp('2030-01-01')


def test_options_are_resolved_from_data(mc_areas):
    result = net_load_ramp(mc_areas)
    assert result.options.study_name == 'mc_study'


def test_options_are_resolved_from_sub_tables(mc_areas):
    result = net_load_ramp(SimulationTableCollection(areas=mc_areas))

    assert result.options.study_name == 'mc_study'
    assert result.areas.options.study_name == 'mc_study'


def test_default_options_without_any_given(example_areas):
    assert net_load_ramp(example_areas).options == SimulationOptions()


def test_net_load_is_derived_when_missing(raw_areas):
    columns_before = list(raw_areas.data.columns)
    result = net_load_ramp(raw_areas, ignore_must_run=True)

    assert result.data['netLoadRamp'].tolist() == [0, 90, -50]
    assert list(raw_areas.data.columns) == columns_before


def test_calculator_with_config_object(mc_areas):
    calculator = NetLoadRampCalculator(RampConfig(mean_prefix='mean'))
    result = calculator.calculate(mc_areas, time_step='monthly')
    assert result.value_columns[0] == 'mean_netLoadRamp'


def test_annual_synthesis_values_and_column_order():
    df = pd.DataFrame({
        'area': ['a'] * 6,
        'mcYear': [1, 1, 1, 2, 2, 2],
        'timeId': [1, 2, 3, 1, 2, 3],
        'netLoad': [100., 104., 100., 50., 58., 60.],
        'BALANCE': [10., 8., 9., 0., 2., 0.],
    })
    result = net_load_ramp(SimulationTable(df, TableTypeEnum.AREAS), time_step='annual', synthesis=True)
    row = result.data.iloc[0]

    assert len(result) == 1
    assert result.synthesis is True
    assert result.time_step == TimeStepEnum.ANNUAL
    assert result.value_columns == [
        'avg_netLoadRamp', 'min_netLoadRamp', 'max_netLoadRamp',
        'avg_balanceRamp', 'min_balanceRamp', 'max_balanceRamp',
        'avg_areaRamp', 'min_areaRamp', 'max_areaRamp',
    ]
    assert row['avg_netLoadRamp'] == pytest.approx(5 / 3)
    assert row['min_netLoadRamp'] == -4
    assert row['max_netLoadRamp'] == 8
    assert row['avg_balanceRamp'] == pytest.approx(-1 / 6)
    assert row['min_balanceRamp'] == -2
    assert row['max_balanceRamp'] == 2
    assert row['avg_areaRamp'] == pytest.approx(1.5)
    assert row['min_areaRamp'] == -3
    assert row['max_areaRamp'] == 10


def test_synthesis_of_districts_only_collection(districts):
    df = pd.concat([districts.data.assign(mcYear=1), districts.data.assign(mcYear=2)], ignore_index=True)
    data = SimulationTableCollection(districts=districts.with_data(df))
    result = net_load_ramp(data, time_step='daily', synthesis=True)

    assert result.areas is None
    assert result.synthesis is True
    row = result.districts.data.iloc[0]
    assert row['avg_netLoadRamp'] == pytest.approx(-5 / 3)
    assert row['min_netLoadRamp'] == -10
    assert row['max_netLoadRamp'] == 5
