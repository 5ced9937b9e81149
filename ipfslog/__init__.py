"""Lamport clocks, signed entries, identities, encrypted links and fetching for an append-only log."""

__version__ = "0.1.0"