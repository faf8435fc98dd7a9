"""Bangchak fuel-price API client package."""

from oilinfo.clients.bangchak.client import BangchakClient


__all__ = ["BangchakClient"]
