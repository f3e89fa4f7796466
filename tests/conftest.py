"""
Pytest configuration and shared fixtures.
"""
import json
import pytest
import sys
from pathlib import Path

# Add repo root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.headlines import EntityExtractor, Highlighter, HeadlinePipeline, RelevanceClassifier


@pytest.fixture
def extractor():
    """Extractor with default settings."""
    return EntityExtractor()


@pytest.fixture
def classifier():
    """Relevance classifier."""
    return RelevanceClassifier()


@pytest.fixture
def highlighter():
    """Highlighter."""
    return Highlighter()


@pytest.fixture
def pipeline():
    """Full headline pipeline."""
    return HeadlinePipeline()


@pytest.fixture
def sample_feed():
    """Feed records as the news provider delivers them."""
    return [
        {"id": 1, "headline": "AI chip boom lifts Nvidia and rivals", "related": "",
         "category": "technology", "datetime": 1717000000, "source": "Reuters", "url": "https://example.com/1"},
        {"id": 2, "headline": "$AAPL leads tech rally", "related": "AAPL",
         "category": "technology", "datetime": 1717000100, "source": "CNBC", "url": "https://example.com/2"},
        {"id": 3, "headline": "Fed signals rate cut as inflation cools", "related": "",
         "category": "top news", "datetime": 1717000200, "source": "Bloomberg", "url": "https://example.com/3"},
        {"id": 4, "headline": "10 tips to save on your next vacation", "related": "",
         "category": "lifestyle", "datetime": 1717000300, "source": "Blog", "url": "https://example.com/4"},
        {"id": 5, "headline": "Nvidia's rally extends as Apple slips", "related": "NVDA",
         "category": "technology", "datetime": 1717000400, "source": "MarketWatch", "url": "https://example.com/5"},
    ]


@pytest.fixture
def feed_file(tmp_path, sample_feed):
    """Feed written to a JSON file, plus one malformed record."""
    path = tmp_path / "headlines.json"
    records = sample_feed + [{"id": 6, "headline": "Broken record", "datetime": "not a date"}]
    path.write_text(json.dumps(records))
    return path
