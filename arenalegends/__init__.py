"""Rules engine for a two-player real-time card battle arena: map, cards, units, spells, battle, server client and slider."""

__version__ = "0.1.0"