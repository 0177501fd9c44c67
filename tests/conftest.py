"""Shared test fixtures for the support centre."""

import sys
from pathlib import Path

import pytest

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from observability import metrics  # noqa: E402
from personalization import CategoryCatalog, InteractionStore, LocalStore, ProfileStorage  # noqa: E402
from web.feedback_store import FeedbackStore  # noqa: E402


@pytest.fixture(autouse=True)
def reset_metrics():
    metrics.reset()
    yield
    metrics.reset()


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Keep config discovery and default state paths inside tmp."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("SUPPORTCENTRE_HOME", str(home))
    monkeypatch.chdir(tmp_path)
    return home


@pytest.fixture
def local_store(tmp_path):
    return LocalStore(tmp_path / "local_state.json")


@pytest.fixture
def tracker(local_store):
    return InteractionStore(ProfileStorage(local_store))


@pytest.fixture
def catalog():
    return CategoryCatalog()


@pytest.fixture
def feedback_store(tmp_path):
    return FeedbackStore(tmp_path / "feedback.db")
