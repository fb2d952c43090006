from pint import UnitRegistry, Unit

from arearamps.enums import QuantityTypeEnum


class UnitNotFound(Exception):
    pass


# Registry without pint's default definitions; only the units below exist.
ureg = UnitRegistry(None, on_redefinition='ignore')

# Hourly results of a simulation are energies per hour.
ureg.define("Wh = [energy]")
ureg.define("MWh = 1e6 Wh = MWh")

ureg.define("W = [power]")
ureg.define("MW = 1e6 W = MW")

ureg.define("minute = [time]")
ureg.define("hour = 60 minute = h")

# Ramps: change of power from one hour to the next.
ureg.define("MW_per_hour = MW / hour")


class Units:
    """
    Units of the columns of simulation tables.

    Hourly area results are energies per hour, which equal the mean power of that hour.
    The ramp of such a column is therefore a power change per hour:

        >>> Units.get_ramp_unit(Units.MWh)
            MW_per_hour

    Aggregation over time depends on the quantity type of a unit: energies are summed,
    power and ramps are averaged (see get_quantity_type_enum).
    """
    _ureg = ureg

    Wh = _ureg.Wh
    MWh = _ureg.MWh

    W = _ureg.W
    MW = _ureg.MW

    MW_per_hour = _ureg.MW_per_hour

    _INTENSIVE_BASES = [W, MW_per_hour]
    _EXTENSIVE_BASES = [Wh]

    @classmethod
    def get_quantity_type_enum(cls, unit: Unit) -> QuantityTypeEnum:
        if any(cls.units_have_same_base(unit, u) for u in cls._INTENSIVE_BASES):
            return QuantityTypeEnum.INTENSIVE
        if any(cls.units_have_same_base(unit, u) for u in cls._EXTENSIVE_BASES):
            return QuantityTypeEnum.EXTENSIVE
        raise UnitNotFound(f'No quantity type registered for unit {unit}.')

    @classmethod
    def get_ramp_unit(cls, unit: Unit) -> Unit:
        """Unit of the hour-to-hour change of a column with the given unit."""
        if cls.units_have_same_base(unit, cls.Wh) or cls.units_have_same_base(unit, cls.W):
            return cls.MW_per_hour
        raise UnitNotFound(f'Ramps are only defined for energy or power columns, got {unit}.')

    @staticmethod
    def units_have_same_base(unit_1: Unit, unit_2: Unit) -> bool:
        return unit_1.dimensionality == unit_2.dimensionality


# Hourly simulation output columns of areas and districts.
SIMULATION_COLUMN_UNITS: dict[str, Unit] = {
    'LOAD': Units.MWh,
    'ROW BAL.': Units.MWh,
    'PSP': Units.MWh,
    'MISC. NDG': Units.MWh,
    'H. ROR': Units.MWh,
    'WIND': Units.MWh,
    'SOLAR': Units.MWh,
    'mustRunTotal': Units.MWh,
    'BALANCE': Units.MWh,
    'netLoad': Units.MWh,
}


def get_column_unit(column: str, units: dict[str, Unit] = None) -> Unit:
    """Unit of a column from the given mapping, falling back to the default simulation units."""
    units = units or {}
    if column in units:
        return units[column]
    if column in SIMULATION_COLUMN_UNITS:
        return SIMULATION_COLUMN_UNITS[column]
    raise UnitNotFound(f'No unit known for column {column}.')


if __name__ == '__main__':
    for uu in [Units.MWh, Units.MW, Units.MW_per_hour]:
        print(uu, Units.get_quantity_type_enum(uu))
    print(Units.get_ramp_unit(get_column_unit('BALANCE')))
