"""Contract, phase and payment registry over a local SQLite database."""

__version__ = "1.0.0"
