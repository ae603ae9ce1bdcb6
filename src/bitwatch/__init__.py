"""bitwatch - Discord notifications for monitored Bitcoin transactions."""

__version__ = "0.1.0"
