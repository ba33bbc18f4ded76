"""Adapters: HTTP clients and exporters.

Each module implements a contract from `core.interfaces` or writes a lookup to
disk; infrastructure details (httpx, Jinja2, WeasyPrint) stay here.
"""
