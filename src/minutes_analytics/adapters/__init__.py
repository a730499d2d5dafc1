# src/minutes_analytics/adapters/__init__.py
"""
Adapters - concrete implementations of the core ports.
"""
