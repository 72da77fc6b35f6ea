# geodat/databases.py

from __future__ import annotations

from geodat.models import Database, DatabaseType

_MAXMIND = "https://geolite.maxmind.com/download/geoip/database"

DATABASES: list[Database] = [
    Database(
        type=DatabaseType.COUNTRY,
        url=f"{_MAXMIND}/GeoIPCountryCSV.zip",
        archive="GeoIPCountryCSV.zip",
        src="GeoIPCountryWhois.csv",
        dest="geoip-country.dat",
    ),
    Database(
        type=DatabaseType.COUNTRY,
        url=f"{_MAXMIND}/GeoIPv6.csv.gz",
        archive="GeoIPv6.csv.gz",
        src="GeoIPv6.csv",
        dest="geoip-country6.dat",
    ),
    Database(
        type=DatabaseType.CITY_EXTENDED,
        url=f"{_MAXMIND}/GeoLiteCity_CSV/GeoLiteCity-latest.zip",
        archive="GeoLiteCity-latest.zip",
        src=["GeoLiteCity-Blocks.csv", "GeoLiteCity-Location.csv"],
        dest=["geoip-city.dat", "geoip-city-names.dat"],
    ),
    Database(
        type=DatabaseType.CITY,
        url=f"{_MAXMIND}/GeoLiteCityv6-beta/GeoLiteCityv6.csv.gz",
        archive="GeoLiteCityv6.csv.gz",
        src="GeoLiteCityv6.csv",
        dest="geoip-city6.dat",
    ),
]
