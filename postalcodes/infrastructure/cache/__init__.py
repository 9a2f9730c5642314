"""File Cache Implementation.

Provides the concrete, size-bounded in-memory implementation of the
FileCache interface with modification-time based invalidation.
Bounded Context: Cache Management
"""
