"""Adapter package for CKAN HTTP I/O.

Purpose:
    Hold the transport (``http_client``), its error types and JSON codec,
    and the resource adapters implementing the domain ports.

Dependencies:
    ``requests`` for network I/O; domain types from ``ckan_client.domain``.

Call context:
    Imported by the package root for the public API, by the CLI for runtime
    wiring and by tests for transport-level behavior verification.
"""
