"""
Business logic services.

Services sit between the application and the database session.
"""
from categories.services import association_service
from categories.services import category_service
from categories.services import tree_service
from categories.services.ledger import CategorizationLedger
from categories.services.slug_service import SlugGenerator, slugify
from categories.services.stats_service import StatsAggregator

__all__ = [
    "association_service",
    "category_service",
    "tree_service",
    "CategorizationLedger",
    "SlugGenerator",
    "slugify",
    "StatsAggregator",
]
