"""
Resource Tracker shared package.

Wire schemas plus the pure assignment reconciliation and relation
derivation logic used by both the API server and the dashboard client.
"""

__version__ = "0.1.0"
