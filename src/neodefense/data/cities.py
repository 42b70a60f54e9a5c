"""Static registry of major world cities used for casualty estimates.

Populations are metropolitan-area estimates (people) and densities are in
people per km². Some metros also appear under a "City" entry holding the
population of the city proper; both entries count when an impact covers them.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class City:
    """A populated place in the registry.

    Attributes:
        name: Display name.
        lat: Latitude in degrees.
        lng: Longitude in degrees.
        population: Resident population.
        density: Population density in people per km².
    """

    name: str
    lat: float
    lng: float
    population: int
    density: float


CITIES: tuple[City, ...] = (
    # Megacities
    City("Tokyo-Yokohama", 35.7, 139.7, 38000000, 4400),
    City("Jakarta", -6.2, 106.8, 35000000, 9600),
    City("Delhi", 28.6, 77.2, 33000000, 11300),
    City("Manila", 14.6, 121.0, 25700000, 15300),
    City("Shanghai", 31.2, 121.5, 24800000, 3900),
    City("São Paulo", -23.6, -46.6, 22400000, 7900),
    City("Seoul", 37.6, 126.9, 25500000, 16000),
    City("Cairo", 30.0, 31.2, 21300000, 19400),
    City("Mexico City", 19.4, -99.1, 21800000, 9600),
    City("Beijing", 39.9, 116.4, 21500000, 1300),
    City("Mumbai", 19.1, 72.9, 21000000, 32300),
    City("Osaka-Kobe", 34.7, 135.5, 18900000, 4600),
    City("Dhaka", 23.8, 90.4, 22000000, 23000),
    City("New York", 40.7, -74.0, 18800000, 4500),
    City("Karachi", 24.9, 67.1, 16800000, 24000),
    City("Buenos Aires", -34.6, -58.4, 15200000, 2600),
    City("Chongqing", 29.6, 106.5, 15400000, 1100),
    City("Istanbul", 41.0, 28.9, 15500000, 2800),
    City("Kolkata", 22.6, 88.4, 15000000, 24000),
    City("Lagos", 6.5, 3.4, 15300000, 18200),
    City("Kinshasa", -4.3, 15.3, 15000000, 1500),
    City("Tianjin", 39.1, 117.2, 14200000, 1200),
    City("Guangzhou", 23.1, 113.3, 13500000, 1800),
    City("Rio de Janeiro", -22.9, -43.2, 13300000, 5200),
    City("Lahore", 31.6, 74.3, 13100000, 6600),
    City("Bangalore", 12.9, 77.6, 13200000, 4100),
    City("Shenzhen", 22.5, 114.1, 12900000, 6500),
    City("Moscow", 55.8, 37.6, 12500000, 4900),
    City("Chennai", 13.1, 80.3, 11500000, 26900),
    City("Bogotá", 4.7, -74.1, 11000000, 4400),
    City("Paris", 48.9, 2.3, 11000000, 3900),
    City("Hyderabad", 17.4, 78.5, 10500000, 18500),
    City("Lima", -12.0, -77.0, 10900000, 3200),
    City("Bangkok", 13.8, 100.5, 10500000, 5300),
    City("Nagoya", 35.2, 136.9, 10400000, 6400),
    City("London", 51.5, -0.1, 9500000, 5700),
    City("Tehran", 35.7, 51.4, 9500000, 6800),
    City("Ho Chi Minh City", 10.8, 106.7, 9300000, 4300),
    City("Luanda", -8.8, 13.2, 8900000, 2000),
    # Major metropolitan areas
    City("Chicago", 41.9, -87.6, 9500000, 1200),
    City("Ahmedabad", 23.0, 72.6, 8800000, 12000),
    City("Kuala Lumpur", 3.1, 101.7, 8600000, 8000),
    City("Xi'an", 34.3, 108.9, 8500000, 850),
    City("Hong Kong", 22.3, 114.2, 7500000, 6800),
    City("Dongguan", 23.0, 113.8, 8300000, 3400),
    City("Hangzhou", 30.3, 120.2, 8100000, 500),
    City("Foshan", 23.0, 113.1, 7900000, 2100),
    City("Shenyang", 41.8, 123.4, 8100000, 620),
    City("Riyadh", 24.7, 46.7, 7700000, 1500),
    City("Baghdad", 33.3, 44.4, 7500000, 2000),
    City("Santiago", -33.4, -70.7, 7200000, 8600),
    City("Belo Horizonte", -19.9, -43.9, 6100000, 7200),
    City("Khartoum", 15.5, 32.5, 6100000, 7000),
    City("Johannesburg", -26.2, 28.0, 10000000, 2200),
    City("Dallas", 32.8, -96.8, 7600000, 1100),
    City("Houston", 29.8, -95.4, 7100000, 1400),
    City("Miami", 25.8, -80.2, 6200000, 4600),
    City("Toronto", 43.7, -79.4, 6200000, 4300),
    City("Madrid", 40.4, -3.7, 6700000, 5300),
    City("Philadelphia", 39.9, -75.2, 6100000, 4500),
    City("Washington DC", 38.9, -77.0, 6300000, 4300),
    City("Los Angeles", 34.1, -118.2, 13200000, 3200),
    City("Barcelona", 41.4, 2.2, 5600000, 16000),
    City("Saint Petersburg", 59.9, 30.3, 5400000, 3900),
    City("Nairobi", -1.3, 36.8, 4400000, 4500),
    City("Berlin", 52.5, 13.4, 3700000, 4100),
    City("Sydney", -33.9, 151.2, 5300000, 2100),
    City("Melbourne", -37.8, 144.9, 5100000, 510),
    City("Casablanca", 33.6, -7.6, 3800000, 9200),
    City("Cape Town", -33.9, 18.4, 4600000, 1500),
    City("Addis Ababa", 9.0, 38.7, 5000000, 5200),
    City("Dar es Salaam", -6.8, 39.3, 6700000, 3100),
    # City proper entries and selectable locations
    City("Vancouver", 49.3, -123.1, 2600000, 2800),
    City("Rome", 41.9, 12.5, 4300000, 2200),
    City("Prague", 50.1, 14.4, 1300000, 2600),
    City("Budapest", 47.5, 19.0, 1800000, 3500),
    City("Singapore", 1.4, 103.8, 5900000, 8400),
    City("Auckland", -36.8, 174.8, 1700000, 350),
    City("New York City", 40.7, -74.0, 8300000, 11000),
    City("Los Angeles City", 34.1, -118.2, 4000000, 3200),
    City("Chicago City", 41.9, -87.6, 2700000, 4600),
    City("Houston City", 29.8, -95.4, 2300000, 1400),
    City("Miami City", 25.8, -80.2, 470000, 4600),
    City("Dallas City", 32.8, -96.8, 1300000, 1500),
    City("Philadelphia City", 39.9, -75.2, 1600000, 4500),
    City("Washington DC City", 38.9, -77.0, 700000, 4300),
    City("Istanbul City", 41.0, 28.9, 15500000, 2800),
    City("Brisbane", -27.5, 153.0, 2600000, 1800),
    City("Perth", -31.9, 115.9, 2100000, 900),
    City("Wellington", -41.3, 174.8, 400000, 1500),
    City("Christchurch", -43.5, 172.6, 400000, 900),
    City("Copenhagen", 55.7, 12.6, 2100000, 6800),
    City("Stockholm", 59.3, 18.1, 2400000, 5200),
    City("Helsinki", 60.2, 24.9, 1500000, 3000),
    City("Oslo", 59.9, 10.8, 1700000, 1700),
    City("Dublin", 53.3, -6.3, 1400000, 4600),
    City("Lisbon", 38.7, -9.1, 2900000, 6500),
    City("Geneva", 46.2, 6.1, 600000, 12800),
    City("Zurich", 47.4, 8.5, 1400000, 4700),
    City("Vienna", 48.2, 16.4, 1900000, 4600),
    City("Brussels", 50.9, 4.4, 1200000, 7500),
    City("Amsterdam", 52.4, 4.9, 2400000, 5100),
    City("Hamburg", 53.6, 10.0, 1900000, 2400),
    City("Munich", 48.1, 11.6, 2600000, 4700),
    City("Frankfurt", 50.1, 8.7, 2300000, 3000),
    City("Dubai", 25.2, 55.3, 3500000, 900),
    City("Abu Dhabi", 24.5, 54.4, 1500000, 400),
    City("Kuwait City", 29.3, 47.5, 4100000, 1900),
    City("Manama", 26.2, 50.6, 700000, 2500),
    City("Doha", 25.4, 51.2, 2400000, 1300),
    City("Muscat", 23.4, 53.8, 1600000, 300),
    City("Giza", 30.1, 31.2, 9200000, 19500),
    City("Alexandria", 31.2, 29.9, 5200000, 8900),
    City("Beirut", 33.9, 35.5, 2400000, 21000),
    City("Damascus", 33.5, 36.3, 2100000, 15800),
    City("Jerusalem", 31.8, 35.2, 1000000, 8000),
    City("Tel Aviv", 32.1, 34.8, 4300000, 7900),
    City("Amman", 32.0, 35.9, 4000000, 4200),
    City("Asunción", -25.3, -57.6, 3200000, 4600),
    City("Montevideo", -34.9, -56.2, 1700000, 2800),
    City("Caracas", 10.5, -66.9, 2900000, 4100),
    City("Medellín", 6.2, -75.6, 4000000, 7200),
    City("Quito", -0.2, -78.5, 2800000, 4400),
    City("Santa Cruz", -16.3, -63.2, 1400000, 2900),
    City("La Paz", -17.8, -63.2, 2300000, 3500),
    City("Accra", 5.6, -0.2, 4300000, 10500),
    City("Abuja", 9.1, 7.4, 3300000, 3700),
    City("Kano", 12.0, 8.5, 4100000, 7800),
    City("Durban", -29.9, 31.0, 3700000, 1600),
    City("Pretoria", -25.7, 28.2, 2900000, 3300),
    City("Kampala", 0.3, 32.6, 3300000, 16800),
    City("Kigali", -1.9, 30.1, 1300000, 1800),
    City("Tunis", 36.8, 10.2, 2300000, 6700),
    City("Algiers", 36.8, 3.1, 7800000, 15600),
    City("Lusaka", -15.4, 28.3, 3100000, 5200),
    City("Harare", -17.8, 31.1, 2100000, 4200),
)
"""Default city registry."""


def find_city(name: str, cities: tuple[City, ...] = CITIES) -> City | None:
    """Look up a city by case-insensitive name."""
    key = name.strip().lower()
    for city in cities:
        if city.name.lower() == key:
            return city
    return None
