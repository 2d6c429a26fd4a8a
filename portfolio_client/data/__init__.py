"""
Data models and payload parsing module.

Record types for snapshots, quotes, position updates and trade requests,
the live Position structure, and orjson-based parsers for transport frames.
"""
