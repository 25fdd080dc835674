"""Building blocks of an exchange-diary service: rooms, turns, alarms, tables and clients."""

__version__ = "0.1.0"