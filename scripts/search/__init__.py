"""
Global search across collectible categories.

Provides substring matching ranked with BM25 and a bounded, clearable
history of recent queries.
"""

from .global_search import (
    GlobalSearchService,
    GlobalSearchResults,
    tokenize,
    searchable_fields,
    matches_query,
    rank_matches,
)

__all__ = [
    'GlobalSearchService',
    'GlobalSearchResults',
    'tokenize',
    'searchable_fields',
    'matches_query',
    'rank_matches',
]

__version__ = '1.0.0'
