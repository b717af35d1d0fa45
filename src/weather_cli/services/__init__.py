"""
Shared infrastructure for provider services.

- http.py - requests session factory (no retries, default timeout)
"""
