"""notevault: local note vault indexing and link graph engine."""

__version__ = "0.1.0"
