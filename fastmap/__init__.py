"""In-memory hash map built from an extensible directory of fixed-size tables."""

__version__ = "0.1.0"
__all__ = ["bitset", "cache", "hashing", "header", "table"]