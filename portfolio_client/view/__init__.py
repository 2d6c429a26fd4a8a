"""
View collaborator module.

Rendering (tables, per-ticker charts, the trade dialog widget) lives outside
the client core; the core only pushes observable side effects through the
PortfolioView interface.
"""

from .base import PortfolioView

__all__ = ["PortfolioView"]
