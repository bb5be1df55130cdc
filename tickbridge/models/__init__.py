"""
Data models module.

Immutable data structures for ticks, host positions and order results, and
the typed commands decoded from inbound lines.
"""
