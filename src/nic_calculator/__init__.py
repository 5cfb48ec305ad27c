"""Anonymous NIC change calculation records and their aggregate statistics."""

__version__ = "0.1.0"
