"""Currency exchange-rate API client package."""

from oilinfo.clients.exchange_rate.client import ExchangeRateClient


__all__ = ["ExchangeRateClient"]
