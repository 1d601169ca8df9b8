"""Static catalog of the cities covered by the dashboard."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable


@dataclass(frozen=True)
class City:
    """A city tracked by the dashboard."""

    city_id: str
    name: str
    state: str

    @property
    def label(self) -> str:
        return f"{self.name}, {self.state}"


CITIES: tuple[City, ...] = (
    City(city_id="mumbai", name="Mumbai", state="Maharashtra"),
    City(city_id="delhi", name="Delhi", state="Delhi"),
    City(city_id="bangalore", name="Bangalore", state="Karnataka"),
    City(city_id="hyderabad", name="Hyderabad", state="Telangana"),
    City(city_id="chennai", name="Chennai", state="Tamil Nadu"),
    City(city_id="kolkata", name="Kolkata", state="West Bengal"),
    City(city_id="pune", name="Pune", state="Maharashtra"),
    City(city_id="ahmedabad", name="Ahmedabad", state="Gujarat"),
    City(city_id="jaipur", name="Jaipur", state="Rajasthan"),
    City(city_id="lucknow", name="Lucknow", state="Uttar Pradesh"),
)


def get_city_by_id(city_id: str, cities: Iterable[City] = CITIES) -> City | None:
    for city in cities:
        if city.city_id == city_id:
            return city
    return None


def iter_cities(keys: Iterable[str] | None = None) -> Iterable[City]:
    if keys is None:
        return CITIES
    selected = []
    for key in keys:
        city = get_city_by_id(key)
        if city:
            selected.append(city)
    return tuple(selected)


__all__ = ["City", "CITIES", "get_city_by_id", "iter_cities"]
