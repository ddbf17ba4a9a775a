# portfolio_timeline/services/__init__.py
"""
Service layer for the Portfolio Timeline library.

Subpackages:
- valuation: trade events -> daily snapshots -> chart windows -> summary
"""
