"""Rate limiting adapters.

This package provides a small abstraction layer so the site can start with
an in-process limiter and later move to a shared store without changing the
API layer.
"""
