"""Isolation application layer."""
