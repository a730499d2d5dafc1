# src/minutes_analytics/__init__.py
"""
Meeting-minutes analytics: aggregation reports over tasks extracted from
meeting transcripts, served over FastAPI.
"""

__version__ = "0.1.0"
