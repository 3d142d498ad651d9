"""HTTP route definitions for the service."""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, HTTPException, status

from app.schemas import (
    CurrentReadingResponse,
    ManualReadingRequest,
    MessageResponse,
    ReadingOut,
    SchedulerStatus,
    SchedulerUpdate,
    StrategyInfo,
    SubscriberDetail,
    SubscriberList,
    SubscriberRequest,
    SubscriberSummary,
)
from models.readings import Reading, StrategyName
from services.errors import (
    IllegalStateError,
    InvalidArgumentError,
    NotFoundError,
    StrategyNotFoundError,
)
from services.scheduler import ScheduledUpdater, build_default_updater
from services.station import WeatherStation, build_default_station
from services.subscribers import Subscriber, create_subscriber

router = APIRouter()
weather_router = APIRouter(prefix="/api/weather", tags=["weather"])

_MANUAL = StrategyName.manual.value


def get_station() -> WeatherStation:
    return build_default_station()


def get_updater() -> ScheduledUpdater:
    return build_default_updater()


def _summary(subscriber: Subscriber) -> SubscriberSummary:
    return SubscriberSummary(
        id=subscriber.subscriber_id, type=subscriber.label, kind=subscriber.kind
    )


def _trigger(
    station: WeatherStation,
    manual_input: Reading | None,
    expected_strategy: str | None = None,
) -> ReadingOut:
    try:
        reading = station.trigger_update(manual_input, expected_strategy=expected_strategy)
    except InvalidArgumentError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    except IllegalStateError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc),
        ) from exc
    return ReadingOut.from_reading(reading)


@weather_router.get(
    "/current",
    response_model=CurrentReadingResponse,
    response_model_exclude_none=True,
    summary="Return the most recent reading.",
)
def current_reading(
    station: WeatherStation = Depends(get_station),
) -> CurrentReadingResponse:
    reading = station.last_reading()
    if reading is None:
        return CurrentReadingResponse(
            message="No weather data available yet. Trigger an update first."
        )
    return CurrentReadingResponse(reading=ReadingOut.from_reading(reading))


@weather_router.get(
    "/strategy",
    response_model=StrategyInfo,
    summary="Show the active strategy and the available ones.",
)
def get_strategy(station: WeatherStation = Depends(get_station)) -> StrategyInfo:
    current = station.current_strategy()
    return StrategyInfo(
        current=current.name if current else None,
        available=[strategy.name for strategy in station.available_strategies()],
    )


@weather_router.put(
    "/strategy/{name}",
    response_model=MessageResponse,
    summary="Switch the active strategy (name is case-insensitive).",
)
def set_strategy(
    name: str,
    station: WeatherStation = Depends(get_station),
) -> MessageResponse:
    try:
        strategy = station.select_strategy(name)
    except StrategyNotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{exc}. Available: {', '.join(exc.available)}",
        ) from exc
    except InvalidArgumentError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    return MessageResponse(message=f"Strategy set to {strategy.name}")


@weather_router.post(
    "/update",
    response_model=ReadingOut,
    summary="Poll the active strategy for a new reading.",
)
def trigger_update(station: WeatherStation = Depends(get_station)) -> ReadingOut:
    if station.is_active(_MANUAL):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Cannot trigger update with MANUAL strategy. Use /api/weather/update/manual instead.",
        )
    return _trigger(station, None)


@weather_router.post(
    "/update/manual",
    response_model=ReadingOut,
    summary="Submit an operator-entered reading.",
)
def manual_update(
    payload: ManualReadingRequest,
    station: WeatherStation = Depends(get_station),
) -> ReadingOut:
    if not station.is_active(_MANUAL):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Current strategy is not MANUAL. Set strategy to MANUAL first.",
        )
    reading = Reading(
        temperature_celsius=payload.temperature_celsius,
        humidity_percent=payload.humidity_percent,
        wind_kph=payload.wind_kph,
        observed_at=payload.observed_at or datetime.now(timezone.utc),
    )
    return _trigger(station, reading, expected_strategy=_MANUAL)


@weather_router.get(
    "/observers",
    response_model=SubscriberList,
    summary="List subscribers in registration order.",
)
def list_observers(station: WeatherStation = Depends(get_station)) -> SubscriberList:
    observers = [_summary(subscriber) for subscriber in station.list_subscribers()]
    return SubscriberList(observers=observers, count=len(observers))


@weather_router.post(
    "/observers",
    status_code=status.HTTP_201_CREATED,
    response_model=SubscriberSummary,
    summary="Register a subscriber.",
)
def subscribe_observer(
    payload: SubscriberRequest,
    station: WeatherStation = Depends(get_station),
) -> SubscriberSummary:
    try:
        subscriber = create_subscriber(payload.type, payload.id)
    except InvalidArgumentError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    if not station.attach(subscriber):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Observer with id '{subscriber.subscriber_id}' already exists",
        )
    return _summary(subscriber)


@weather_router.get(
    "/observers/{subscriber_id}",
    response_model=SubscriberDetail,
    summary="Show one subscriber and the last reading it received.",
)
def get_observer(
    subscriber_id: str,
    station: WeatherStation = Depends(get_station),
) -> SubscriberDetail:
    try:
        subscriber = station.get_subscriber(subscriber_id)
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(exc),
        ) from exc
    last_seen = subscriber.last_seen
    return SubscriberDetail(
        id=subscriber.subscriber_id,
        type=subscriber.label,
        kind=subscriber.kind,
        last_seen=ReadingOut.from_reading(last_seen) if last_seen else None,
    )


@weather_router.delete(
    "/observers/{subscriber_id}",
    response_model=MessageResponse,
    summary="Remove a subscriber.",
)
def unsubscribe_observer(
    subscriber_id: str,
    station: WeatherStation = Depends(get_station),
) -> MessageResponse:
    if not station.unsubscribe(subscriber_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Observer {subscriber_id!r} not found.",
        )
    return MessageResponse(message=f"Observer {subscriber_id} unsubscribed successfully")


def _scheduler_status(updater: ScheduledUpdater) -> SchedulerStatus:
    return SchedulerStatus(
        enabled=updater.enabled,
        running=updater.running,
        active=updater.station.is_active(updater.strategy_name),
        interval_seconds=updater.interval_seconds,
    )


@weather_router.get(
    "/scheduler",
    response_model=SchedulerStatus,
    summary="Show the scheduled updater status.",
)
def get_scheduler(updater: ScheduledUpdater = Depends(get_updater)) -> SchedulerStatus:
    return _scheduler_status(updater)


@weather_router.put(
    "/scheduler",
    response_model=SchedulerStatus,
    summary="Enable or disable scheduled updates.",
)
def set_scheduler(
    payload: SchedulerUpdate,
    updater: ScheduledUpdater = Depends(get_updater),
) -> SchedulerStatus:
    updater.set_enabled(payload.enabled)
    return _scheduler_status(updater)


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@router.get(
    "/",
    summary="Root endpoint mirrors health information.",
    status_code=status.HTTP_200_OK,
)
async def root() -> dict[str, str]:
    return {"status": "ok", "detail": "See /health for service status."}


router.include_router(weather_router)
