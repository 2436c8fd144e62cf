"""Landscape: grid, krill resource and weather."""

from ecosim.landscape.location import Location
from ecosim.landscape.weather import Weather, WeatherMode
from ecosim.landscape.field import Field, OutOfBoundsError

__all__ = [
    "Location",
    "Weather",
    "WeatherMode",
    "Field",
    "OutOfBoundsError",
]
