"""
Headline Pipeline - Main orchestrator for headline analysis.

Coordinates all components: validation, entity extraction, relevance,
topic/impact labels, highlighting, and the "symbols mentioned" aggregation.
"""

from typing import Any, Dict, Iterable, List, Optional, Tuple, Union
from dataclasses import dataclass, asdict, field
import json
import logging
import time

from pydantic import ValidationError

import config
from .schema import HeadlineRecord
from .extractor import EntityExtractor, InstrumentMatch
from .relevance import RelevanceClassifier, RelevanceDecision
from .topics import ImpactLabel, TopicLabel, classify_impact, classify_topic
from .highlighter import Highlighter, Segment, segments_to_dicts

logger = logging.getLogger(__name__)


@dataclass
class HeadlineAnalysis:
    """Everything computed for one headline."""
    record: HeadlineRecord
    matches: List[InstrumentMatch]
    decision: RelevanceDecision
    topic: TopicLabel
    impact: Optional[ImpactLabel]
    segments: List[Segment] = field(default_factory=list)
    # every symbol named in the text, before the match cap
    mentions: List[str] = field(default_factory=list)

    @property
    def primary_symbol(self) -> Optional[str]:
        """Single click target for the headline."""
        return self.matches[0].symbol if self.matches else None

    @property
    def keep(self) -> bool:
        return self.decision.keep

    def to_dict(self) -> Dict[str, Any]:
        return {
            "headline": self.record.to_dict(),
            "matches": [m.to_dict() for m in self.matches],
            "primary_symbol": self.primary_symbol,
            "relevance": self.decision.to_dict(),
            "topic": self.topic.to_dict(),
            "impact": self.impact.value if self.impact else None,
            "segments": segments_to_dicts(self.segments),
            "mentions": self.mentions,
        }


@dataclass
class ProcessingStats:
    """Statistics from processing run."""
    total_headlines: int
    kept_headlines: int
    hidden_headlines: int
    pass_rate: float
    processing_time_ms: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


RecordLike = Union[HeadlineRecord, Dict[str, Any]]


class HeadlinePipeline:
    """
    Main pipeline for headline processing.

    Flow:
    1. Validate the feed record
    2. Extract instruments (max 2)
    3. Decide market relevance
    4. Label topic and impact
    5. Compute highlight segments
    """

    def __init__(
        self,
        extractor: Optional[EntityExtractor] = None,
        classifier: Optional[RelevanceClassifier] = None,
        highlighter: Optional[Highlighter] = None,
    ):
        """
        Initialize pipeline with components.

        All components are optional and will use defaults if not provided.
        """
        self.extractor = extractor or EntityExtractor()
        self.classifier = classifier or RelevanceClassifier()
        self.highlighter = highlighter or Highlighter()

    @staticmethod
    def to_record(item: RecordLike) -> HeadlineRecord:
        """Validate a raw feed dict; raises pydantic.ValidationError."""
        if isinstance(item, HeadlineRecord):
            return item
        return HeadlineRecord.model_validate(item)

    def analyze(self, item: RecordLike) -> HeadlineAnalysis:
        """
        Run every stage for one headline.

        Args:
            item: HeadlineRecord or raw feed dict

        Returns:
            HeadlineAnalysis
        """
        record = self.to_record(item)
        matches = self.extractor.extract(record.text, record.related_symbols)
        decision = self.classifier.classify(record.text, matches)
        return HeadlineAnalysis(
            record=record,
            matches=matches,
            decision=decision,
            topic=classify_topic(record.text, record.category),
            impact=classify_impact(record.text),
            segments=self.highlighter.highlight(record.text, matches),
            mentions=self.extractor.mentions(record.text),
        )

    def process(
        self,
        items: Iterable[RecordLike],
        markets_only: bool = False,
    ) -> Tuple[List[HeadlineAnalysis], ProcessingStats]:
        """
        Analyze a batch of headlines.

        Args:
            items: Records or raw feed dicts
            markets_only: Drop headlines that fail the relevance filter

        Returns:
            Tuple of (analyses, processing_stats)
        """
        start_time = time.time()

        analyses = [self.analyze(item) for item in items]
        kept = sum(1 for a in analyses if a.keep)
        total = len(analyses)

        stats = ProcessingStats(
            total_headlines=total,
            kept_headlines=kept,
            hidden_headlines=total - kept,
            pass_rate=kept / total if total else 0.0,
            processing_time_ms=(time.time() - start_time) * 1000,
        )

        logger.info(
            f"Processed {total} headlines: {kept} kept, {total - kept} hidden "
            f"({stats.pass_rate*100:.1f}% pass rate) in {stats.processing_time_ms:.0f}ms"
        )

        if markets_only:
            analyses = [a for a in analyses if a.keep]
        return analyses, stats

    def load_from_json(
        self,
        file_path: str,
        markets_only: bool = False,
    ) -> Tuple[List[HeadlineAnalysis], ProcessingStats]:
        """
        Load and process headlines from a JSON file.

        Expected format:
        [
            {"id": 1, "headline": "...", "related": "AAPL,MSFT",
             "category": "technology", "datetime": 1717000000,
             "source": "Reuters", "url": "..."},
            ...
        ]

        Records that fail validation are skipped with a warning.
        """
        with open(file_path, 'r') as f:
            data = json.load(f)

        if isinstance(data, dict):
            data = data.get('headlines', [])

        records = []
        for item in data:
            try:
                records.append(self.to_record(item))
            except ValidationError as e:
                logger.warning(f"Error parsing headline: {e.error_count()} validation error(s)")
                continue

        return self.process(records, markets_only=markets_only)


def mentioned_symbols(
    analyses: Iterable[HeadlineAnalysis],
    limit: int = config.MENTIONED_SYMBOLS_LIMIT,
) -> List[Tuple[str, int]]:
    """
    Most-mentioned symbols across headlines.

    Counts the uncapped mentions of each headline (tickers and company
    names): a third company beyond the match cap still counts, inferred
    theme ETFs do not. Each headline counts a symbol once. Sorted by count
    descending; ties keep the order in which symbols were first seen.
    """
    counts: Dict[str, int] = {}
    for analysis in analyses:
        for symbol in dict.fromkeys(analysis.mentions):
            counts[symbol] = counts.get(symbol, 0) + 1

    ranked = sorted(counts.items(), key=lambda kv: -kv[1])
    return ranked[:max(0, limit)]
