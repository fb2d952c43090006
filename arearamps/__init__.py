from arearamps.config import RampConfig
from arearamps.enums import TableTypeEnum, TimeStepEnum, BoundaryModeEnum
from arearamps.simulation_data import SimulationTable, SimulationTableCollection, SimulationOptions
from arearamps.energy_data_handling import net_load_ramp, NetLoadRampCalculator
from arearamps.utils.logging import get_logger, set_log_level

__version__ = '0.1.0'

__all__ = [
    'RampConfig',
    'TableTypeEnum',
    'TimeStepEnum',
    'BoundaryModeEnum',
    'SimulationTable',
    'SimulationTableCollection',
    'SimulationOptions',
    'net_load_ramp',
    'NetLoadRampCalculator',
    'get_logger',
    'set_log_level',
]
