from slugshortener.models.short_url_model import ShortURLModel
from slugshortener.models.expiry_policy import ExpiryPolicy
from slugshortener.models.server_summary_model import ServerSummaryModel


__all__ = [
    'ShortURLModel',
    'ExpiryPolicy',
    'ServerSummaryModel',
]
