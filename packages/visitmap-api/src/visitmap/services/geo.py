"""Country-level coordinates for placing visits on a world map.

Precision is deliberately coarse: every visit from a country lands on that
country's approximate centre.
"""

from collections import Counter
from collections.abc import Iterable

from visitmap.schemas.visit import VisitMarker, VisitRecord
from visitmap.services.client_location import LOCAL_COUNTRY, UNKNOWN_COUNTRY

# ISO-3166 alpha-2 code -> (latitude, longitude)
COUNTRY_COORDINATES: dict[str, tuple[float, float]] = {
    "US": (39.8283, -98.5795),
    "GB": (54.7024, -3.2766),
    "CA": (56.1304, -106.3468),
    "AU": (-25.2744, 133.7751),
    "DE": (51.1657, 10.4515),
    "FR": (46.2276, 2.2137),
    "IT": (41.8719, 12.5674),
    "ES": (40.4637, -3.7492),
    "NL": (52.1326, 5.2913),
    "BE": (50.5039, 4.4699),
    "CH": (46.8182, 8.2275),
    "AT": (47.5162, 14.5501),
    "SE": (60.1282, 18.6435),
    "NO": (60.472, 8.4689),
    "DK": (56.2639, 9.5018),
    "FI": (61.9241, 25.7482),
    "PL": (51.9194, 19.1451),
    "JP": (36.2048, 138.2529),
    "CN": (35.8617, 104.1954),
    "IN": (20.5937, 78.9629),
    "BR": (-14.235, -51.9253),
    "MX": (23.6345, -102.5528),
    "AR": (-38.4161, -63.6167),
    "ZA": (-30.5595, 22.9375),
    "EG": (26.0975, 30.0444),
    "NG": (9.082, 8.6753),
    "KE": (-0.0236, 37.9062),
    "SG": (1.3521, 103.8198),
    "MY": (4.2105, 101.9758),
    "TH": (15.87, 100.9925),
    "ID": (-0.7893, 113.9213),
    "PH": (12.8797, 121.774),
    "VN": (14.0583, 108.2772),
    "KR": (35.9078, 127.7669),
    "NZ": (-40.9006, 174.886),
    "IE": (53.4129, -8.2439),
    "PT": (39.3999, -8.2245),
    "GR": (39.0742, 21.8243),
    "TR": (38.9637, 35.2433),
    "RU": (61.524, 105.3188),
    "SA": (23.8859, 45.0792),
    "AE": (23.4241, 53.8478),
    "IL": (31.0461, 34.8516),
    # Placeholder near the middle of a world map
    UNKNOWN_COUNTRY: (20.0, 0.0),
}

_SENTINELS = {LOCAL_COUNTRY.upper(): LOCAL_COUNTRY, UNKNOWN_COUNTRY.upper(): UNKNOWN_COUNTRY}


def normalize_country(country: str) -> str:
    """Trim and upper-case a country value, keeping the Local/Unknown literals."""
    normalized = country.strip().upper()
    return _SENTINELS.get(normalized, normalized)


def coordinates_for(country: str) -> tuple[float, float] | None:
    """Return map coordinates for a country value.

    Local visits have no position and return None. Codes missing from
    COUNTRY_COORDINATES fall back to the Unknown placeholder.
    """
    normalized = normalize_country(country)
    if normalized == LOCAL_COUNTRY:
        return None
    return COUNTRY_COORDINATES.get(normalized, COUNTRY_COORDINATES[UNKNOWN_COUNTRY])


def build_markers(records: Iterable[VisitRecord]) -> list[VisitMarker]:
    """Aggregate visits into one marker per country, busiest first.

    Unmapped codes keep their own marker but are drawn at the Unknown
    placeholder position.
    """
    counts = Counter(normalize_country(record.country) for record in records)
    counts.pop(LOCAL_COUNTRY, None)

    markers = []
    for country, visits in sorted(counts.items(), key=lambda item: (-item[1], item[0])):
        latitude, longitude = coordinates_for(country)
        markers.append(
            VisitMarker(
                country=country,
                latitude=latitude,
                longitude=longitude,
                visits=visits,
            )
        )
    return markers
