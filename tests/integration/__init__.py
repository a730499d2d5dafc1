# tests/integration/__init__.py
"""
Integration tests for the analytics service.

Integration tests verify that different parts of the system work together
correctly through the FastAPI routes over a seeded in-memory store.
"""
