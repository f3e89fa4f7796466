"""
Headline Intelligence Layer - Market relevance and entity extraction for news headlines.

Finds the instruments a headline is about, keeps only market-relevant
headlines, labels topic and impact, and marks clickable entity spans.
"""

from .schema import HeadlineRecord
from .extractor import EntityExtractor, InstrumentKind, InstrumentMatch
from .relevance import RelevanceClassifier, RelevanceDecision, RelevanceSignal, SignalKind
from .topics import ImpactLabel, TopicLabel, classify_impact, classify_topic
from .highlighter import Highlighter, HighlightSpan
from .lexicon import sector_of
from .pipeline import HeadlineAnalysis, HeadlinePipeline, ProcessingStats, mentioned_symbols

__all__ = [
    'HeadlineRecord',
    'EntityExtractor',
    'InstrumentKind',
    'InstrumentMatch',
    'RelevanceClassifier',
    'RelevanceDecision',
    'RelevanceSignal',
    'SignalKind',
    'ImpactLabel',
    'TopicLabel',
    'classify_impact',
    'classify_topic',
    'Highlighter',
    'HighlightSpan',
    'sector_of',
    'HeadlineAnalysis',
    'HeadlinePipeline',
    'ProcessingStats',
    'mentioned_symbols',
]
