"""
Simulation data containers.

Tables of simulation results (areas, districts, links) are wrapped together with the
metadata that downstream operations rely on: the time step of the timeId column, whether
the scenario dimension was already synthesized and the simulation options.
"""

from arearamps.simulation_data.simulation_options import SimulationOptions, resolve_simulation_options
from arearamps.simulation_data.simulation_table import (
    SimulationTable,
    SimulationTableCollection,
    MissingColumnError,
    TableTypeError,
    InvalidTableAttributesError,
    ID_COLUMNS,
    TIME_COLUMNS,
    id_columns,
    entity_columns,
    require_columns,
    add_class_and_attributes,
    check_attributes,
)

__all__ = [
    'SimulationOptions',
    'resolve_simulation_options',
    'SimulationTable',
    'SimulationTableCollection',
    'MissingColumnError',
    'TableTypeError',
    'InvalidTableAttributesError',
    'ID_COLUMNS',
    'TIME_COLUMNS',
    'id_columns',
    'entity_columns',
    'require_columns',
    'add_class_and_attributes',
    'check_attributes',
]
