"""Use-case layer built on the CKAN ports.

Each module coordinates domain objects and ports without performing transport
I/O directly.
"""
