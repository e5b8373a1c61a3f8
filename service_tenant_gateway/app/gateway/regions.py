"""
Cloud regions and their tenant API hosts.
"""

from enum import Enum

from shared.errors import ValidationError


class Region(str, Enum):
    """Regions an MSP account can live in."""
    EUROPE = "Europe"
    ASIA = "Asia"
    NORTH_AMERICA = "North America"


REGION_BASE_URLS = {
    Region.EUROPE: "https://eu.ruckus.cloud",
    Region.ASIA: "https://asia.ruckus.cloud",
    Region.NORTH_AMERICA: "https://ruckus.cloud",
}


def resolve_base_url(region: str) -> str:
    """Return the API base URL for ``region`` (enum member or its display name)."""
    try:
        return REGION_BASE_URLS[Region(region)]
    except ValueError:
        raise ValidationError(
            "Invalid region selected",
            details={"region": str(region), "allowed": [r.value for r in Region]}
        )
