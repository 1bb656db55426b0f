"""Pydantic models for aircraft state and the partial updates decoded from the feed."""

from datetime import datetime, timezone
from typing import Literal, Union

from pydantic import BaseModel, Field

from ..geometry import is_valid_fix


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AircraftState(BaseModel):
    id: str
    callsign: str = ""
    lat: float = 0.0
    lon: float = 0.0
    speed: float = 0.0
    track: float = 0.0
    last_seen: datetime = Field(default_factory=_utc_now)

    @property
    def has_fix(self) -> bool:
        return is_valid_fix(self.lat, self.lon)


class CallsignUpdate(BaseModel):
    kind: Literal["callsign"] = "callsign"
    id: str
    callsign: str
    received: datetime = Field(default_factory=_utc_now)

    model_config = {"frozen": True}


class PositionUpdate(BaseModel):
    kind: Literal["position"] = "position"
    id: str
    lat: float
    lon: float
    received: datetime = Field(default_factory=_utc_now)

    model_config = {"frozen": True}


class VelocityUpdate(BaseModel):
    kind: Literal["velocity"] = "velocity"
    id: str
    speed: float
    track: float
    received: datetime = Field(default_factory=_utc_now)

    model_config = {"frozen": True}


AircraftUpdate = Union[CallsignUpdate, PositionUpdate, VelocityUpdate]
