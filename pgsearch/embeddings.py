"""
Embedding providers turn search terms into vectors for semantic search.

Providers are passed in explicitly, there is no globally configured provider:

    vector = to_vector(provider, "magic wand")
    query = semantic(select(Post), Post.embedding, vector, distance="cosine_distance")
"""

from typing import Any, List, Protocol, Sequence, Union, runtime_checkable

from pgsearch.logging_setup import logger


@runtime_checkable
class EmbeddingProvider(Protocol):
    def generate(self, terms: Sequence[str], **options: Any) -> List[Any]:
        """Generates one pgvector value per term. Should raise (or retry) on errors."""
        ...

    def embedding_model(self, **options: Any) -> str:
        """Name of the model generating the embeddings, e.g. `sentence-transformers/paraphrase-MiniLM-L6-v2`"""
        ...


def check_provider(provider: Any, capability: str) -> None:
    if not callable(getattr(provider, capability, None)):
        raise TypeError(f"Embedding provider {provider!r} must implement `{capability}`")


def to_vectors(provider: EmbeddingProvider, terms: Union[str, Sequence[str]], **options: Any) -> List[Any]:
    check_provider(provider, "generate")
    if isinstance(terms, str):
        terms = [terms]
    terms = list(terms)
    logger.debug(f"Generating {len(terms)} embeddings with {type(provider).__name__}")
    return list(provider.generate(terms, **options))


def to_vector(provider: EmbeddingProvider, term: str, **options: Any) -> Any:
    vectors = to_vectors(provider, term, **options)
    return vectors[0] if vectors else None


def embedding_model(provider: EmbeddingProvider, **options: Any) -> str:
    check_provider(provider, "embedding_model")
    return provider.embedding_model(**options)
