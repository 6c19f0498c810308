"""Translate XML configuration into component descriptors."""

__version__ = "0.1.0"
