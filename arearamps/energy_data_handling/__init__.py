"""Energy Data Handling Module.

Operations on hourly simulation results of areas and districts:

Time Series Processing:
    - Conversion of simulation tables to coarser time steps with per-column aggregators
    - Synthesis of the scenario (mcYear) dimension into summary statistics

Variable Utilities:
    - Net load of areas and districts
    - Ramps of net load and balance, optionally resampled and synthesized

Example Usage
-------------
```python
from arearamps.energy_data_handling import net_load_ramp

ramps = net_load_ramp(simulation_data, time_step='weekly', synthesis=True)
```
"""

from .net_load_calculator import NetLoadCalculator
from .scenario_synthesizer import ScenarioSynthesizer
from .time_step_converter import TimeStepConverter, TimeStepConversionError, SamplingMethodEnum

from . import ramps

from .ramps import RampCalculator, RampResampler, NetLoadRampCalculator, net_load_ramp

__all__ = [
    'NetLoadCalculator',
    'ScenarioSynthesizer',
    'TimeStepConverter',
    'TimeStepConversionError',
    'SamplingMethodEnum',

    'ramps',

    'RampCalculator',
    'RampResampler',
    'NetLoadRampCalculator',
    'net_load_ramp',
]
