"""Project persistence and SDK layer.

This module saves and loads project documents and exposes the client.
It ties ingest and transforms together for library and CLI callers.
"""
