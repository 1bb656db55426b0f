"""
SBS-1 (BaseStation) line decoding.

Lines are comma separated: field 0 is the record kind ("MSG"), field 1 the
transmission type and field 4 the ICAO hex ident. Only identification (1),
airborne position (3) and airborne velocity (4) messages are kept.
"""

import logging
import math

from ..geometry import is_valid_fix
from .models import CallsignUpdate, PositionUpdate, VelocityUpdate

log = logging.getLogger("termtrack.sbs")

MIN_FIELDS = 11

F_TYPE = 1
F_ICAO = 4
F_CALLSIGN = 10
F_SPEED = 12
F_TRACK = 13
F_LAT = 14
F_LON = 15


def _float(fields, idx) -> float:
    try:
        value = float(fields[idx])
    except (IndexError, ValueError):
        return 0.0
    return value if math.isfinite(value) else 0.0


def _parse_callsign(icao, fields):
    callsign = fields[F_CALLSIGN].strip()
    if not callsign:
        return None
    return CallsignUpdate(id=icao, callsign=callsign)


def _parse_position(icao, fields):
    if len(fields) <= F_LON:
        return None
    lat = _float(fields, F_LAT)
    lon = _float(fields, F_LON)
    if not is_valid_fix(lat, lon):
        return None
    return PositionUpdate(id=icao, lat=lat, lon=lon)


def _parse_velocity(icao, fields):
    if len(fields) <= F_TRACK:
        return None
    speed = _float(fields, F_SPEED)
    track = _float(fields, F_TRACK)
    if speed == 0 and track == 0:
        return None
    return VelocityUpdate(id=icao, speed=speed, track=track)


_PARSERS = {
    "1": _parse_callsign,
    "3": _parse_position,
    "4": _parse_velocity,
}


def parse_sbs_line(line: str):
    """Decode one line into an update model, or None if it carries nothing useful."""
    fields = line.rstrip("\r\n").split(",")
    if len(fields) < MIN_FIELDS or fields[0] != "MSG":
        return None

    icao = fields[F_ICAO].strip()
    if not icao:
        return None

    parser = _PARSERS.get(fields[F_TYPE].strip())
    if parser is None:
        return None
    return parser(icao, fields)
