"""FanDuel NFL lineup generation."""

__version__ = "0.1.0"
