"""State layer.

Session-owned state of the tracking engine: the viewport, the current
aircraft snapshot and the per-registration enrichment cache.
"""
