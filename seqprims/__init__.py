"""Sequence primitives: delayed sequences, monoids, streams, scans, searching, sorting, collect-reduce and grouping."""

__version__ = "0.1.0"