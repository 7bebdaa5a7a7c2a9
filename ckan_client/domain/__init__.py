"""Domain types shared by adapters, use cases and the CLI.

Purpose:
    Hold transport-agnostic data (pagination options, datastore records),
    the call context used for cancellation, and the port protocols the
    adapters implement.
"""
