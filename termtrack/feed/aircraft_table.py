"""Merged per-aircraft state built from partial feed updates.

The table has a single writer: the UI event loop applies every update.
Feed threads only post update messages.
"""

import logging

from ..geometry import is_valid_fix
from .models import AircraftState, CallsignUpdate, PositionUpdate, VelocityUpdate

log = logging.getLogger("termtrack.aircraft")


class AircraftTable:

    def __init__(self):
        self._aircraft: dict[str, AircraftState] = {}

    def __len__(self):
        return len(self._aircraft)

    def __contains__(self, icao):
        return icao in self._aircraft

    def get(self, icao: str):
        return self._aircraft.get(icao)

    @property
    def aircraft(self) -> dict[str, AircraftState]:
        """Live mapping, for readers on the writer's thread."""
        return self._aircraft

    def snapshot(self) -> dict[str, AircraftState]:
        """Independent copy for readers on another thread."""
        return {icao: ac.model_copy() for icao, ac in self._aircraft.items()}

    def apply(self, update) -> AircraftState:
        """Merge an update. Empty or zero fields never erase stored values."""
        ac = self._aircraft.get(update.id)
        if ac is None:
            ac = AircraftState(id=update.id, last_seen=update.received)
            self._aircraft[update.id] = ac
            log.debug("New aircraft %s", update.id)

        if isinstance(update, CallsignUpdate):
            if update.callsign:
                ac.callsign = update.callsign
        elif isinstance(update, PositionUpdate):
            if is_valid_fix(update.lat, update.lon):
                ac.lat = update.lat
                ac.lon = update.lon
        elif isinstance(update, VelocityUpdate):
            if update.speed != 0:
                ac.speed = update.speed
            if update.track != 0:
                ac.track = update.track

        ac.last_seen = update.received
        return ac

    def with_fix_count(self) -> int:
        return sum(1 for ac in self._aircraft.values() if ac.has_fix)
