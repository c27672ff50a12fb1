"""
PostgreSQL search for SQLAlchemy queries

Adds pattern match, trigram similarity, full text and pgvector semantic search
predicates and ordering to SQLAlchemy `Select` statements.
"""

from .embeddings import EmbeddingProvider, embedding_model, to_vector, to_vectors
from .engine import SearchEngine, SearchEngineError
from .enums import (
    DistanceMetric,
    FilterType,
    PatternMatchMode,
    RankFunction,
    RankWeight,
    SearchMode,
    SearchOrder,
    SimilarityType,
    TermFunction,
)
from .field_resolver import FieldResolutionError, FieldResolver
from .full_text import full_text, to_tsquery
from .inspector import substituted_sql, tap_explain_analyze, tap_sql
from .models import FullTextConfig, SearchRequest, SemanticConfig, SimilarityConfig
from .pattern_match import ilike, like, pattern_match, similar_to
from .pipeline import apply_case, apply_if
from .semantic import semantic
from .similarity import similarity
from .utils import format_sql_query, sanitize
from .validators import InvalidOption, SearchError, ShapeMismatch, UnsupportedCombination

__all__ = [
    "ilike",
    "like",
    "similar_to",
    "pattern_match",
    "similarity",
    "full_text",
    "to_tsquery",
    "semantic",
    "apply_if",
    "apply_case",
    "SearchEngine",
    "SearchEngineError",
    "SearchRequest",
    "FieldResolver",
    "FieldResolutionError",
    "EmbeddingProvider",
    "to_vector",
    "to_vectors",
    "embedding_model",
    "substituted_sql",
    "tap_sql",
    "tap_explain_analyze",
    "SimilarityConfig",
    "FullTextConfig",
    "SemanticConfig",
    "SearchError",
    "InvalidOption",
    "ShapeMismatch",
    "UnsupportedCombination",
    "DistanceMetric",
    "FilterType",
    "PatternMatchMode",
    "RankFunction",
    "RankWeight",
    "SearchMode",
    "SearchOrder",
    "SimilarityType",
    "TermFunction",
    "sanitize",
    "format_sql_query",
]
