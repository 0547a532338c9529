"""Shared Kernel module.

Components shared by every bounded context. Today this is the observation
context that probes use to attach request and isolation metadata to their
events. Keep it free of imports from any bounded context.
"""
