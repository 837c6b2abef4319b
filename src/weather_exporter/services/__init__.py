"""
Shared utilities.

- http.py - requests session with User-Agent and default timeout
"""
