"""OilInfo: Thai fuel-price API with cached upstream data and derived views."""

__version__ = "1.0.0"
