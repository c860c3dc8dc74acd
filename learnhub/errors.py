"""Domain exceptions raised by services and mapped to responses in backend.py."""


class EnrichmentError(Exception):
    """The text-generation gateway failed or returned nothing usable."""


class StatsUpdateError(Exception):
    """Updating a user's running stats failed after the primary write was staged."""
