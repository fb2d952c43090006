from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Optional

from arearamps.enums import BoundaryModeEnum


class InvalidConfigSettingError(Exception):
    pass


@dataclass
class RampConfig:
    """
    Settings for the ramp computation.

    Attributes:
        boundary_mode: How the first row of each series is detected before its ramps are
            set to zero. PER_ENTITY resets the first row of every area / district / mcYear
            series; GLOBAL_MIN_TIME_ID resets all rows at the table-wide minimum timeId.
        check_input_attributes: Raise if the input is not hourly, non-synthetic data.
        mean_prefix: Prefix of the mean columns when ramps are resampled or synthesized.
    """
    boundary_mode: BoundaryModeEnum = BoundaryModeEnum.PER_ENTITY
    check_input_attributes: bool = True
    mean_prefix: str = 'avg'

    def __post_init__(self):
        if not isinstance(self.boundary_mode, BoundaryModeEnum):
            self.boundary_mode = BoundaryModeEnum(self.boundary_mode)

    def merge(self, other: Optional[RampConfig | dict]) -> RampConfig:
        if other is None:
            return self

        values = {f.name: getattr(self, f.name) for f in fields(self)}

        if isinstance(other, dict):
            updates = other
        elif isinstance(other, RampConfig):
            updates = {name: getattr(other, name) for name in values}
        else:
            raise TypeError(f"Config must be dict or {RampConfig.__name__}, got {type(other)}")

        for key, value in updates.items():
            if key not in values:
                raise InvalidConfigSettingError(
                    f'{key} is not a setting of {self.__class__.__name__}. Valid settings: {sorted(values)}'
                )
            if value is not None:
                values[key] = value

        return self.__class__(**values)
