"""
Ramps of net load and balance.

    - RampCalculator: hourly ramps of a single areas / districts table
    - RampResampler: resampling / synthesis of hourly ramps with mean, min and max
    - NetLoadRampCalculator, net_load_ramp: entry point for tables and collections
"""

from .ramp_calculator import RampCalculator
from .ramp_resampler import RampResampler
from .net_load_ramp import NetLoadRampCalculator, net_load_ramp

__all__ = [
    'RampCalculator',
    'RampResampler',
    'NetLoadRampCalculator',
    'net_load_ramp',
]
