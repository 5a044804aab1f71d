"""accessgate - employee permission engine for portal sub-systems."""

__version__ = "0.1.0"
