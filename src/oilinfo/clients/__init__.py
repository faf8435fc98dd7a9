"""Clients for the external data providers."""

from oilinfo.clients.bangchak import BangchakClient
from oilinfo.clients.exceptions import SchemaError, UpstreamError
from oilinfo.clients.exchange_rate import ExchangeRateClient


__all__ = [
    "BangchakClient",
    "ExchangeRateClient",
    "SchemaError",
    "UpstreamError",
]
