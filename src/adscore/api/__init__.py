"""API module for adscore.

- Validates inputs, resolves sessions, calls data sources and the scoring core
- Returns payloads for the frontend
- Forbidden: metric computation, rule evaluation
"""
