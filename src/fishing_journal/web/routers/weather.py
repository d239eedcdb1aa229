"""Simulated weather routes."""

from fastapi import APIRouter

from ...services.weather import fetch_historical_weather

router = APIRouter(prefix="/weather", tags=["weather"])


@router.get("")
async def get_weather(location: str, date: str):
    """Simulated weather for a location and date."""
    snapshot = await fetch_historical_weather(location.strip(), date)
    return snapshot.to_dict()
