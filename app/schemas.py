"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from models.readings import Reading, SubscriberKind


class ReadingOut(BaseModel):
    """A weather reading as exposed over HTTP."""

    model_config = ConfigDict(populate_by_name=True)

    temperature_celsius: float = Field(..., alias="temperatureCelsius")
    humidity_percent: float = Field(..., alias="humidityPercent")
    wind_kph: float = Field(..., alias="windKph")
    observed_at: datetime = Field(..., alias="observedAt")

    @classmethod
    def from_reading(cls, reading: Reading) -> "ReadingOut":
        return cls(
            temperature_celsius=reading.temperature_celsius,
            humidity_percent=reading.humidity_percent,
            wind_kph=reading.wind_kph,
            observed_at=reading.observed_at,
        )


class ManualReadingRequest(BaseModel):
    """Operator-entered values for the MANUAL strategy."""

    model_config = ConfigDict(populate_by_name=True)

    temperature_celsius: float = Field(..., alias="temperatureCelsius")
    humidity_percent: float = Field(..., alias="humidityPercent")
    wind_kph: float = Field(..., alias="windKph")
    observed_at: Optional[datetime] = Field(
        default=None,
        alias="observedAt",
        description="Capture time; defaults to the time the request is received.",
    )


class CurrentReadingResponse(BaseModel):
    reading: Optional[ReadingOut] = None
    message: Optional[str] = None


class StrategyInfo(BaseModel):
    current: Optional[str] = None
    available: List[str] = Field(default_factory=list)


class MessageResponse(BaseModel):
    message: str


class SubscriberRequest(BaseModel):
    id: str = Field(..., description="Unique subscriber identifier.")
    type: str = Field(..., description="One of PHONE, WEBAPP or OUTDOOR.")


class SubscriberSummary(BaseModel):
    id: str
    type: str
    kind: SubscriberKind


class SubscriberDetail(SubscriberSummary):
    last_seen: Optional[ReadingOut] = Field(default=None, alias="lastSeen")

    model_config = ConfigDict(populate_by_name=True)


class SubscriberList(BaseModel):
    observers: List[SubscriberSummary] = Field(default_factory=list)
    count: int = Field(..., ge=0)


class SchedulerStatus(BaseModel):
    enabled: bool
    running: bool
    active: bool = Field(..., description="Whether the SCHEDULED strategy is currently active.")
    interval_seconds: float


class SchedulerUpdate(BaseModel):
    enabled: bool
