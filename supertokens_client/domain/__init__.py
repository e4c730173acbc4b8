"""Pure request/response helpers: URL resolution, headers, classification.

These modules do no I/O so they can be unit-tested on their own and shared by
every operation.
"""
__all__ = ["paths", "headers", "status"]
