# tests/unit/__init__.py
"""
Unit tests for the analytics service.

Unit tests focus on testing individual functions, classes, and modules
in isolation from Supabase, using the in-memory store or mocks.
"""
