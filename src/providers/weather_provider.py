# src/providers/weather_provider.py

"""OpenWeather current-conditions provider."""

import math
from typing import Any

from curl_cffi import requests as curl_requests

from src.errors import CityNotFoundError, InvalidQueryError, ProviderError
from src.models.weather import Coordinates, WeatherObservation
from src.providers.base_provider import BaseProvider

_NUMBER = (int, float)


def _optional_int(block: dict[str, Any], key: str) -> int:
    """Whole-number reading that may be absent or junk; defaults to 0."""
    value = block.get(key)
    if (
        isinstance(value, bool)
        or not isinstance(value, _NUMBER)
        or not math.isfinite(value)
    ):
        return 0
    return int(value)


class WeatherProvider(BaseProvider):
    """Fetch the current weather for a city, in metric units."""

    def __init__(self) -> None:
        super().__init__("weather")

    def health_url(self) -> str:
        return "https://api.openweathermap.org"

    def _error_for_status(
        self, resp: curl_requests.Response, context: str,
    ) -> ProviderError:
        if resp.status_code == 404:
            return CityNotFoundError(context)
        return super()._error_for_status(resp, context)

    def fetch(self, city: str) -> WeatherObservation:
        """Return the current weather for ``city``.

        Raises ``CityNotFoundError`` for unknown cities and
        ``ProviderAuthError`` when the API key is rejected.
        """
        city = city.strip()
        if not city:
            raise InvalidQueryError("City name is required")

        payload = self._fetch_json(
            self.settings.OPENWEATHER_URL,
            params={
                "q": city,
                "appid": self.settings.OPENWEATHER_API_KEY,
                "units": "metric",
            },
            context=city,
        )
        observation = self._parse(payload)
        self.logger.info(
            "Weather fetched for %s: %.1f°C, rain %.1fmm, country %s",
            city,
            observation.temperature,
            observation.rain,
            observation.country_code,
        )
        return observation

    def _parse(self, payload: dict[str, Any]) -> WeatherObservation:
        """Convert an OpenWeather payload into a WeatherObservation."""
        conditions = self._require(payload, "weather", list)
        first: dict[str, Any] = (
            conditions[0]
            if conditions and isinstance(conditions[0], dict)
            else {}
        )

        # ``rain`` is absent on dry days; ``3h`` may be absent too
        rain_block = payload.get("rain")
        rain = 0.0
        if isinstance(rain_block, dict):
            raw_rain = rain_block.get("3h", 0)
            if isinstance(raw_rain, _NUMBER) and not isinstance(
                raw_rain, bool
            ):
                rain = float(raw_rain)

        main = payload.get("main")
        if not isinstance(main, dict):
            main = {}
        return WeatherObservation(
            temperature=float(self._require(payload, "main.temp", _NUMBER)),
            feels_like=float(
                self._require(payload, "main.feels_like", _NUMBER)
            ),
            wind_speed=float(
                self._require(payload, "wind.speed", _NUMBER)
            ),
            rain=rain,
            country_code=self._require(payload, "sys.country", str),
            coordinates=Coordinates(
                lat=float(self._require(payload, "coord.lat", _NUMBER)),
                lon=float(self._require(payload, "coord.lon", _NUMBER)),
            ),
            description=str(first.get("description", "")),
            humidity=_optional_int(main, "humidity"),
            pressure=_optional_int(main, "pressure"),
            icon=str(first.get("icon", "")),
            city_name=str(payload.get("name", "")),
        )
