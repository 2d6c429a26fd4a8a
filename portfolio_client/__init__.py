"""
Portfolio Client - Live Market Position Reconciliation

A client library that consumes a publish/subscribe stream of position
snapshots, price quotes, position updates and error notices, reconciles them
into a queryable portfolio, and forwards validated trade requests back over
the same transport.
"""

__version__ = "0.1.0"
__author__ = "Portfolio Client Team"
