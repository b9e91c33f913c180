from dataclasses import dataclass
from datetime import datetime, timedelta, UTC


@dataclass(frozen=True)
class ShortURLModel:
    """Represent a slug to target mapping.

    Attributes:
        slug (str):
            The unique short identifier of the record.
        target (str):
            The destination the slug redirects to. Not validated.
        clicks (int):
            Number of times the slug has been resolved. Never decreases.
        ttl (timedelta | None):
            Remaining Time-To-Live of the record. None if the record
            carries no expiry.

    Example:
        >>> from datetime import timedelta
        >>> url = ShortURLModel(
        ...     slug="abcd2345",
        ...     target="https://example.com/article/123",
        ...     clicks=3,
        ...     ttl=timedelta(hours=1),
        ... )
        >>> url.target
        'https://example.com/article/123'
        >>> url.clicks
        3
    """

    slug: str
    target: str
    clicks: int = 0
    ttl: timedelta | None = None

    @property
    def expires_at(self) -> datetime | None:
        """Absolute expiry time in UTC, derived from the remaining TTL."""
        if self.ttl is None:
            return None
        return datetime.now(UTC) + self.ttl
