"""
Request-driven search
Resolves the fields of a `SearchRequest` and applies the matching search builder
"""

from typing import Any, List, Mapping, Optional

from pgsearch.embeddings import EmbeddingProvider, check_provider, to_vector
from pgsearch.enums import PatternMatchMode, SearchMode
from pgsearch.field_resolver import FieldResolutionError, FieldResolver
from pgsearch.full_text import full_text
from pgsearch.logging_setup import logger
from pgsearch.models import SearchRequest
from pgsearch.pattern_match import pattern_match
from pgsearch.pipeline import apply_case
from pgsearch.semantic import semantic
from pgsearch.similarity import similarity
from pgsearch.validators import UnsupportedCombination, check_known_options


class SearchEngineError(Exception):
    """Custom exception for search engine errors"""

    pass


class SearchEngine:
    """Applies search requests to queries over a fixed set of bound entities"""

    def __init__(self, bindings: Mapping[str, Any], embedding_provider: Optional[EmbeddingProvider] = None):
        try:
            self.field_resolver = FieldResolver(bindings)
        except FieldResolutionError as e:
            raise SearchEngineError(f"Invalid bindings: {str(e)}")
        if embedding_provider is not None:
            check_provider(embedding_provider, "generate")
        self.embedding_provider = embedding_provider

    def apply(self, query, request: SearchRequest):
        """
        Returns `query` narrowed and ordered by the request

        Raises:
            SearchEngineError: a field can't be resolved
            SearchError: the request options are invalid
        """
        qualifiers = self.resolve_qualifiers(request.fields)
        logger.debug(f"Applying {request.mode.value} search over {request.fields}")

        return apply_case(
            query,
            request.mode,
            {
                SearchMode.ilike: lambda q: self._pattern_match(q, qualifiers, request, PatternMatchMode.ilike),
                SearchMode.like: lambda q: self._pattern_match(q, qualifiers, request, PatternMatchMode.like),
                SearchMode.similar_to: lambda q: self._pattern_match(q, qualifiers, request, PatternMatchMode.similar_to),
                SearchMode.similarity: lambda q: similarity(q, qualifiers, request.term, **request.options),
                SearchMode.full_text: lambda q: full_text(q, qualifiers, request.term, **request.options),
                SearchMode.semantic: lambda q: self._semantic(q, qualifiers, request),
            },
        )

    def resolve_qualifiers(self, fields: List[str]) -> List[Any]:
        try:
            return self.field_resolver.resolve_fields(fields)
        except FieldResolutionError as e:
            raise SearchEngineError(f"Field resolution error: {str(e)}")

    def _pattern_match(self, query, qualifiers, request: SearchRequest, mode: PatternMatchMode):
        check_known_options(request.options, ())
        return pattern_match(query, qualifiers, request.term, mode)

    def _semantic(self, query, qualifiers, request: SearchRequest):
        if self.embedding_provider is None:
            raise UnsupportedCombination("Semantic search requires an embedding provider, none was configured")
        vector = to_vector(self.embedding_provider, request.term)
        if vector is None:
            raise SearchEngineError(f"The embedding provider returned no vector for {request.term!r}")
        return semantic(query, qualifiers, vector, **request.options)
