"""TLS SNI hostname extraction and a chained hash table with classic 32-bit string hashes."""

__version__ = "0.1.0"

__all__ = ["hashes", "hashes_extra", "table", "ops", "tls"]