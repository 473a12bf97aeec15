"""Routing — route compiler, chunked dispatch table, and request matcher.

Routes are registered during setup and compiled into an immutable
lookup structure once; matching never changes it.
"""
