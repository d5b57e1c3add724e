"""Ingestion layer.

This package fetches status payloads from the vehicle and turns them into
normalized property writes.
"""

__all__: list[str] = []
