"""Marketguard - validate proposed changes to a plugin marketplace index."""

__version__ = "0.1.0"
