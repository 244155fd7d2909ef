"""
Shared service utilities.

- http.py - requests session with retry/backoff and the ``fetch_json`` helper
"""
