"""
GHS to HMIS rating conversion.
"""

from .hmis_converter import Firing, GHSToHMISConverter, convert_to_hmis

__all__ = [
    'Firing',
    'GHSToHMISConverter',
    'convert_to_hmis',
]
