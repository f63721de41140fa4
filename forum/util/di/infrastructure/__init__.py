"""Infrastructure providers."""

# Import bases
from .persistence import PersistenceProvider, RepositoryProvider
from .summarizer import SummarizerProvider

# Import implementations (needed for __subclasses__())
from .persistence import ProdPersistenceProvider  # noqa: F401
from .summarizer import ProdSummarizerProvider  # noqa: F401

__all__ = [
    "PersistenceProvider",
    "ProdPersistenceProvider",
    "ProdSummarizerProvider",
    "RepositoryProvider",
    "SummarizerProvider",
]
