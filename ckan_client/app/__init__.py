"""Application composition layer for the command-line front end.

Wires the HTTP client, resource adapters and use cases into runnable
commands without placing transport logic in argument handling.
"""
