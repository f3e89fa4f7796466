"""
Tests for the headline pipeline, feed schema and aggregation.
"""
import json
import logging
from datetime import datetime

import pytest
import pytz
from pydantic import ValidationError

from src.headlines import (
    HeadlineRecord,
    InstrumentKind,
    TopicLabel,
    mentioned_symbols,
    sector_of,
)


class TestHeadlineRecord:
    """Feed record validation."""

    def test_feed_field_names(self):
        """headline/related/datetime map onto the internal fields."""
        record = HeadlineRecord.model_validate({
            "id": 42, "headline": "Apple rises", "related": "AAPL", "datetime": 1717000000,
        })
        assert record.id == "42"
        assert record.text == "Apple rises"
        assert record.related_symbols == "AAPL"
        assert record.timestamp == datetime.fromtimestamp(1717000000, tz=pytz.UTC)

    def test_internal_field_names(self):
        """Internal names are accepted too."""
        record = HeadlineRecord(text="Apple rises", related_symbols="AAPL")
        assert record.text == "Apple rises"

    def test_iso_timestamp_normalized(self):
        """ISO strings with offsets become UTC."""
        record = HeadlineRecord.model_validate({"text": "x", "timestamp": "2024-05-29T20:26:40+04:00"})
        assert record.timestamp == pytz.UTC.localize(datetime(2024, 5, 29, 16, 26, 40))
        assert record.timestamp.utcoffset().total_seconds() == 0

    def test_zulu_and_naive(self):
        """Z suffix and naive datetimes are treated as UTC."""
        zulu = HeadlineRecord.model_validate({"text": "x", "timestamp": "2024-01-15T10:30:00Z"})
        naive = HeadlineRecord(text="x", timestamp=datetime(2024, 1, 15, 10, 30))
        assert zulu.timestamp == naive.timestamp
        assert naive.timestamp.tzinfo is not None

    def test_numeric_string_timestamp(self):
        """Unix seconds as a string are accepted."""
        record = HeadlineRecord.model_validate({"text": "x", "datetime": "1717000000"})
        assert record.timestamp == datetime.fromtimestamp(1717000000, tz=pytz.UTC)

    def test_nulls_become_empty(self):
        """Null text fields are empty strings."""
        record = HeadlineRecord.model_validate({"headline": None, "related": None, "category": None})
        assert record.text == ""
        assert record.related_symbols == ""
        assert record.category == ""
        assert record.timestamp is None

    def test_related_list(self):
        """A list of related symbols is joined."""
        record = HeadlineRecord.model_validate({"text": "x", "related": ["AAPL", "MSFT"]})
        assert record.related_symbols == "AAPL,MSFT"

    def test_extra_fields_ignored(self):
        """Unknown feed fields are dropped."""
        record = HeadlineRecord.model_validate({"text": "x", "image": "https://example.com/a.png"})
        assert not hasattr(record, "image")

    @pytest.mark.parametrize("bad", ["not a date", True, [1, 2]])
    def test_bad_timestamp(self, bad):
        """Unparseable timestamps fail validation."""
        with pytest.raises(ValidationError):
            HeadlineRecord.model_validate({"text": "x", "datetime": bad})


class TestAnalyze:
    """Single-headline analysis."""

    def test_full_analysis(self, pipeline, sample_feed):
        """Every stage runs for one record."""
        analysis = pipeline.analyze(sample_feed[0])
        assert [m.symbol for m in analysis.matches] == ["NVDA", "SOXX"]
        assert analysis.primary_symbol == "NVDA"
        assert analysis.keep
        assert analysis.topic is TopicLabel.MARKETS_UP
        assert analysis.impact is None

    def test_primary_symbol_none(self, pipeline):
        """No matches, no click target."""
        analysis = pipeline.analyze({"headline": "Fed signals rate cut as inflation cools"})
        assert analysis.primary_symbol is None
        assert analysis.topic is TopicLabel.MACRO
        assert analysis.decision.signal_names == ["macro"]

    def test_accepts_record(self, pipeline):
        """Validated records pass straight through."""
        analysis = pipeline.analyze(HeadlineRecord(text="Bank of America raised guidance"))
        assert analysis.matches[0].symbol == "BAC"
        assert analysis.matches[0].kind is InstrumentKind.EQUITY

    def test_invalid_record(self, pipeline):
        """Invalid records raise ValidationError."""
        with pytest.raises(ValidationError):
            pipeline.analyze({"headline": "x", "datetime": "yesterday"})

    def test_to_dict(self, pipeline, sample_feed):
        """JSON rendering is serializable and complete."""
        d = pipeline.analyze(sample_feed[1]).to_dict()
        json.dumps(d)
        assert d["primary_symbol"] == "AAPL"
        assert d["matches"] == [{"symbol": "AAPL", "kind": "equity", "sector": "Tech"}]
        assert d["relevance"]["signals"] == ["ticker:AAPL", "equity"]
        assert d["topic"]["tone"] == "green"
        assert d["segments"][0] == {"start": 0, "end": 5, "text": "$AAPL", "symbol": "AAPL"}
        assert d["headline"]["timestamp"].endswith("+00:00")


class TestProcess:
    """Batch processing."""

    def test_stats(self, pipeline, sample_feed):
        """Counts kept and hidden headlines."""
        analyses, stats = pipeline.process(sample_feed)
        assert len(analyses) == 5
        assert stats.total_headlines == 5
        assert stats.kept_headlines == 4
        assert stats.hidden_headlines == 1
        assert stats.pass_rate == pytest.approx(0.8)
        assert stats.processing_time_ms >= 0

    def test_markets_only(self, pipeline, sample_feed):
        """Hidden headlines are dropped; stats still cover the whole batch."""
        analyses, stats = pipeline.process(sample_feed, markets_only=True)
        assert len(analyses) == 4
        assert all(a.keep for a in analyses)
        assert stats.total_headlines == 5

    def test_empty_batch(self, pipeline):
        """Empty input gives zeroed stats."""
        analyses, stats = pipeline.process([])
        assert analyses == []
        assert stats.pass_rate == 0.0

    def test_summary_logged(self, pipeline, sample_feed, caplog):
        """A batch summary is logged at INFO."""
        with caplog.at_level(logging.INFO, logger="src.headlines.pipeline"):
            pipeline.process(sample_feed)
        assert "Processed 5 headlines: 4 kept, 1 hidden" in caplog.text


class TestLoadFromJson:
    """Batch analysis from a feed file."""

    def test_bad_records_skipped(self, pipeline, feed_file, caplog):
        """Malformed records are skipped with a warning."""
        with caplog.at_level(logging.WARNING, logger="src.headlines.pipeline"):
            analyses, stats = pipeline.load_from_json(str(feed_file))
        assert stats.total_headlines == 5
        assert "Error parsing headline" in caplog.text

    def test_wrapped_object(self, pipeline, tmp_path, sample_feed):
        """A {"headlines": [...]} wrapper is accepted."""
        path = tmp_path / "wrapped.json"
        path.write_text(json.dumps({"headlines": sample_feed}))
        analyses, _ = pipeline.load_from_json(str(path), markets_only=True)
        assert len(analyses) == 4


class TestMentionedSymbols:
    """Symbols-mentioned aggregation."""

    def test_ranked_by_count(self, pipeline, sample_feed):
        """Count descending, ties in first-seen order."""
        analyses, _ = pipeline.process(sample_feed)
        assert mentioned_symbols(analyses) == [("NVDA", 2), ("AAPL", 2)]

    def test_limit(self, pipeline, sample_feed):
        """Capped at the limit."""
        analyses, _ = pipeline.process(sample_feed)
        assert mentioned_symbols(analyses, limit=1) == [("NVDA", 2)]
        assert mentioned_symbols(analyses, limit=0) == []

    def test_counts_beyond_match_cap(self, pipeline):
        """A third company still counts though only two are matched."""
        analyses, _ = pipeline.process([{"headline": "Apple, Microsoft and Amazon report earnings"}])
        assert len(analyses[0].matches) == 2
        assert mentioned_symbols(analyses) == [("AAPL", 1), ("MSFT", 1), ("AMZN", 1)]

    def test_empty(self):
        """Nothing analyzed, nothing mentioned."""
        assert mentioned_symbols([]) == []


class TestSectors:
    """Display sector lookup."""

    def test_known(self):
        assert sector_of("NVDA") == "Tech"
        assert sector_of("jpm") == "Finance"
        assert sector_of("SOXX") == "ETF/Index"

    def test_unknown(self):
        assert sector_of("ZZZZ") is None
        assert sector_of("") is None
