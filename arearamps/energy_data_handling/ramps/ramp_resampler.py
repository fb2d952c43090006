from arearamps.energy_data_handling.scenario_synthesizer import ScenarioSynthesizer
from arearamps.energy_data_handling.time_step_converter import TimeStepConverter
from arearamps.energy_data_handling.ramps.ramp_calculator import RampCalculator
from arearamps.enums import TimeStepEnum
from arearamps.simulation_data.simulation_table import SimulationTable
from arearamps.utils.logging import get_logger

logger = get_logger(__name__)


class RampResampler:
    """Brings hourly ramps to the requested time step and synthesis mode.

    Three cases are distinguished:

        - hourly, no synthesis: the hourly ramps are returned unchanged.
        - synthesis: the mcYear dimension is collapsed into avg_, min_ and max_ columns per
          ramp, which are then resampled with mean, min and max respectively.
        - coarser time step, no synthesis: every ramp is resampled three times, with mean
          (avg_ column), min (min_ column) and max (max_ column).

    In both non-hourly cases the value columns come out in the order

        avg_netLoadRamp, min_netLoadRamp, max_netLoadRamp,
        avg_balanceRamp, min_balanceRamp, max_balanceRamp,
        avg_areaRamp, min_areaRamp, max_areaRamp

    Args:
        synthesizer: Collapses the mcYear dimension.
        converter: Changes the time step.
        mean_prefix: Prefix of the averaged columns.
    """
    MIN_PREFIX = 'min'
    MAX_PREFIX = 'max'

    def __init__(
            self,
            synthesizer: ScenarioSynthesizer = None,
            converter: TimeStepConverter = None,
            mean_prefix: str = 'avg',
            ramp_columns: list[str] = None,
    ):
        self.synthesizer = synthesizer or ScenarioSynthesizer()
        self.converter = converter or TimeStepConverter()
        self.mean_prefix = mean_prefix
        self.ramp_columns = ramp_columns or list(RampCalculator.RAMP_COLUMNS)

    def resample(
            self,
            ramp_table: SimulationTable,
            time_step: TimeStepEnum | str = TimeStepEnum.HOURLY,
            synthesis: bool = False
    ) -> SimulationTable:
        time_step = TimeStepEnum.from_value(time_step)

        if synthesis:
            logger.debug(f'Synthesizing ramps and resampling them to {time_step.value}.')
            return self._synthesize_and_resample(ramp_table, time_step)
        if time_step != TimeStepEnum.HOURLY:
            logger.debug(f'Resampling ramps to {time_step.value} with mean, min and max.')
            return self._resample_with_min_max(ramp_table, time_step)
        return ramp_table

    def _synthesize_and_resample(self, ramp_table: SimulationTable, time_step: TimeStepEnum) -> SimulationTable:
        synthesis = self.synthesizer.synthesize(
            ramp_table, self.MIN_PREFIX, self.MAX_PREFIX, prefix_for_means=self.mean_prefix
        )
        return self.converter.change_time_step(
            synthesis,
            time_step,
            fun=['mean', 'min', 'max'] * len(self.ramp_columns),
        )

    def _resample_with_min_max(self, ramp_table: SimulationTable, time_step: TimeStepEnum) -> SimulationTable:
        df = ramp_table.data.copy()
        units = ramp_table.units.copy()
        for prefix in [self.MIN_PREFIX, self.MAX_PREFIX]:
            for col in self.ramp_columns:
                df[self._prefixed(prefix, col)] = df[col]
                if col in units:
                    units[self._prefixed(prefix, col)] = units[col]

        value_cols = (
            self.ramp_columns
            + [self._prefixed(self.MIN_PREFIX, c) for c in self.ramp_columns]
            + [self._prefixed(self.MAX_PREFIX, c) for c in self.ramp_columns]
        )
        n = len(self.ramp_columns)
        extended = ramp_table.with_attributes(data=df[ramp_table.id_columns + value_cols], units=units)
        resampled = self.converter.change_time_step(
            extended,
            time_step,
            fun=['mean'] * n + ['min'] * n + ['max'] * n,
        )

        ordered_value_cols = []
        for col in self.ramp_columns:
            ordered_value_cols += [col, self._prefixed(self.MIN_PREFIX, col), self._prefixed(self.MAX_PREFIX, col)]

        renaming = {col: self._prefixed(self.mean_prefix, col) for col in self.ramp_columns}
        data = resampled.data[resampled.id_columns + ordered_value_cols].rename(columns=renaming)
        units = {renaming.get(c, c): u for c, u in resampled.units.items()}
        return resampled.with_attributes(data=data, units=units)

    @staticmethod
    def _prefixed(prefix: str, column: str) -> str:
        return f'{prefix}_{column}'
