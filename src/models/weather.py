# src/models/weather.py

"""Current weather observation for a queried city."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Coordinates:
    """Latitude / longitude pair."""

    lat: float
    lon: float


@dataclass(frozen=True)
class WeatherObservation:
    """Weather at query time. Temperatures in °C, rain in mm over 3h."""

    temperature: float
    feels_like: float
    wind_speed: float
    rain: float
    country_code: str
    coordinates: Coordinates
    description: str = ""
    humidity: int = 0
    pressure: int = 0
    icon: str = ""
    city_name: str = ""
