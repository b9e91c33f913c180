from dataclasses import dataclass
from datetime import timedelta

from slugshortener.constants import TTL


@dataclass(frozen=True)
class ExpiryPolicy:
    """Time-to-live policy applied to short URL records.

    Records are created with `default_ttl` seconds to live. With a sliding
    policy, every hit resets both the record and its hit counter back to the
    full window, so records die only after one window without traffic.

    Attributes:
        default_ttl (int):
            Lifetime of a record in seconds. Defaults to one hour.
        sliding (bool):
            If True, each hit refreshes the TTL. Defaults to True.

    Example:
        >>> policy = ExpiryPolicy(default_ttl=600)
        >>> policy.seconds
        600
        >>> policy.as_timedelta()
        datetime.timedelta(seconds=600)
    """

    default_ttl: int = TTL.ONE_HOUR
    sliding: bool = True

    def __post_init__(self):
        if isinstance(self.default_ttl, bool) or not isinstance(self.default_ttl, int):
            raise TypeError(f'Default TTL must be of type integer (given type: {type(self.default_ttl)}).')
        if self.default_ttl <= 0:
            raise ValueError(f'Default TTL must be a positive number of seconds (given value: {self.default_ttl}).')
        if not isinstance(self.sliding, bool):
            raise TypeError(f'Sliding flag must be of type boolean (given type: {type(self.sliding)}).')

    @property
    def seconds(self) -> int:
        return self.default_ttl

    def as_timedelta(self) -> timedelta:
        return timedelta(seconds=self.default_ttl)
