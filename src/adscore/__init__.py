"""adscore: Google Ads campaign scoring backend."""

__version__ = "0.1.0"
