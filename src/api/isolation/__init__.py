"""Isolation bounded context.

Multi-level data isolation for the platform: who may read which data, and
how cache keys, log fields and storage filters are scoped to a caller's
position in the tenant hierarchy.
"""
