"""Pure domain pieces: expiry math and collaborator interfaces.

These modules are intentionally free of routing concerns so they can
be unit-tested and reused by both the server and the probe runner.
"""
__all__ = ["expiry", "ports"]
