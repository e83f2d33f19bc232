"""Ingestion layer.

Helpers that turn raw feed payloads into normalized domain values.
"""

__all__: list[str] = []
