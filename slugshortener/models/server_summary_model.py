from dataclasses import dataclass, field

from slugshortener.models.short_url_model import ShortURLModel


# fmt: off
@dataclass(frozen=True)
class ServerSummaryModel:
    known_slugs: list[ShortURLModel] = field(default_factory=list)  # Best-effort sample of live records
    keyspace: dict = field(default_factory=dict)                    # Parsed `INFO keyspace` section, e.g. {'db0': {'keys': 2, ...}}
# fmt: on
