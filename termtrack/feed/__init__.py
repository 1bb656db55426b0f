"""SBS feed decoding, the TCP client and the merged aircraft table."""

from .aircraft_table import AircraftTable
from .models import AircraftState, AircraftUpdate, CallsignUpdate, PositionUpdate, VelocityUpdate
from .sbs import parse_sbs_line
from .sbs_client import SbsFeedClient

__all__ = [
    'AircraftTable',
    'AircraftState',
    'AircraftUpdate',
    'CallsignUpdate',
    'PositionUpdate',
    'VelocityUpdate',
    'parse_sbs_line',
    'SbsFeedClient',
]
