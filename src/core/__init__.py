"""Core: configuration, domain models, contracts and services.

Nothing in here performs I/O directly; adapters do.
"""
