"""Card-driven cram school management game engine."""

__version__ = "0.1.0"
