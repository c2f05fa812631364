"""Aggregation module for campaign summaries.

- Reduces campaign records to summary statistics
- Forbidden: scoring rules, data fetching, HTTP concerns
"""
