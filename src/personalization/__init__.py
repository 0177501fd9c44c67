"""Client-side personalization: tracking, category inference, recommendations."""

from .catalog import Category, CategoryCatalog, Resource
from .classifier import Classifier, InteractionSignal
from .models import InterestProfile
from .ranker import Ranker, Recommendation
from .search import SearchEntry, SearchIndex
from .storage import LocalStore, ProfileStorage
from .tracker import InteractionStore

__all__ = [
    "Category",
    "CategoryCatalog",
    "Classifier",
    "InteractionSignal",
    "InteractionStore",
    "InterestProfile",
    "LocalStore",
    "ProfileStorage",
    "Ranker",
    "Recommendation",
    "Resource",
    "SearchEntry",
    "SearchIndex",
]
