"""
Domain Models Package
Export all domain entities
"""

from .dividend import Dividend
from .position import CurrentPosition, Currency, Position, PriceSource
from .summary import PortfolioSummary

__all__ = [
    # Enums
    "Currency",
    "PriceSource",

    # Entities
    "CurrentPosition",
    "Dividend",
    "PortfolioSummary",
    "Position",
]
