"""Radical API: civic-engagement backend for proposals, votes and petitions."""

__version__ = "1.0.0"
