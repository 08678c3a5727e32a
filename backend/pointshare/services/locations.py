"""Dining locations offered when creating a request."""

DINING_LOCATIONS = (
    "C9/C10 Dining Hall",
    "Oakes Cafe",
    "Cowell/Stevenson Dining Hall",
    "Crown/Merrill Dining Hall",
    "Porter/Kresge Dining Hall",
    "Other",
)


def get_locations() -> list[str]:
    """Locations in display order. Requests may still name any location."""
    return list(DINING_LOCATIONS)
