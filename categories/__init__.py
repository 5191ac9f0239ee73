"""
Categories - hierarchical categorization for arbitrary entities

Tags application entities with nested categories and keeps per-kind
usage counters on every category.

Components:
- SlugGenerator: transliterated, collision-free category slugs
- TreeRenderer: breadcrumb labels for hierarchical select widgets
- CategorizationLedger: attach / detach / sync of entity categories
- StatsAggregator: incremental per-category usage counters
"""

__version__ = "0.1.0"
