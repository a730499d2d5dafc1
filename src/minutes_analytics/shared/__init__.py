# src/minutes_analytics/shared/__init__.py
"""
Shared helpers used across adapters and domains.

Usage:
    from minutes_analytics.shared.utils import parse_timestamp, utc_now
"""
