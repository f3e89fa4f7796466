"""
Topic & Impact labels for headline display.

Keyword buckets checked in a fixed order; the first bucket that matches wins.
"""

from enum import Enum
from typing import Dict, List, Optional, Tuple
import re
import logging

logger = logging.getLogger(__name__)


class TopicLabel(Enum):
    """Display topic for a headline: (value, label, tone)."""

    MARKETS_UP = ("markets_up", "Markets", "green")
    MARKETS_DOWN = ("markets_down", "Markets", "red")
    MACRO = ("macro", "Macro", "neutral")
    EARNINGS = ("earnings", "Earnings", "neutral")
    COMMODITIES = ("commodities", "Commodities", "neutral")
    NEWS = ("news", "News", "neutral")

    def __init__(self, key: str, label: str, tone: str):
        self.key = key
        self.label = label
        self.tone = tone

    def to_dict(self) -> dict:
        return {"key": self.key, "label": self.label, "tone": self.tone}


class ImpactLabel(Enum):
    """Optional urgency badge."""
    MARKET_MOVING = "Market moving"
    HIGH_IMPACT = "High impact"
    ANALYST_SIGNAL = "Analyst signal"


# Feed categories that decide a topic on their own
EARNINGS_CATEGORIES = {"earnings"}
COMMODITY_CATEGORIES = {"commodities", "commodity", "crypto", "forex"}
MACRO_CATEGORIES = {"macro", "economy", "economic"}


def _compile(patterns: List[str]) -> re.Pattern:
    return re.compile('|'.join(f'(?:{p})' for p in patterns), re.IGNORECASE)


# Checked in this order; category shortcuts apply to the first three
TOPIC_PATTERNS: List[Tuple[TopicLabel, re.Pattern]] = [
    (TopicLabel.EARNINGS, _compile([
        r'\bearnings\b', r'\beps\b', r'quarterly results', r'\bq[1-4] results\b',
        r'\bguidance\b', r'\b(?:beats?|miss(?:es)?) (?:estimates|expectations)\b',
        r'\bprofit warning\b', r'\brevenue (?:beat|miss)\b',
    ])),
    (TopicLabel.COMMODITIES, _compile([
        r'\boil\b', r'\bcrude\b', r'\bgold\b', r'\bsilver\b', r'\bcopper\b',
        r'natural gas', r'\bopec\b', r'\bbitcoin\b', r'\bcrypto', r'\bethereum\b',
        r'\bwheat\b', r'\bbrent\b', r'\bwti\b',
    ])),
    (TopicLabel.MACRO, _compile([
        r'\bfed\b', r'federal reserve', r'inflation', r'\bcpi\b', r'\brates?\b',
        r'\bjobs\b', r'payrolls?', r'\bgdp\b', r'\btreasur(?:y|ies)\b', r'\byields?\b',
        r'recession', r'tariffs?', r'central bank', r'unemployment',
    ])),
    (TopicLabel.MARKETS_UP, _compile([
        r'\brall(?:y|ies|ied)\b', r'\bsurg(?:e|es|ed)\b', r'\bsoar(?:s|ed)?\b',
        r'\bjump(?:s|ed)?\b', r'\bgains?\b', r'\bclimb(?:s|ed)?\b', r'record high',
        r'\brises?\b', r'\brose\b', r'\blifts?\b', r'\bboom\b', r'\brebounds?\b',
    ])),
    (TopicLabel.MARKETS_DOWN, _compile([
        r'\bfall(?:s)?\b', r'\bfell\b', r'\bdrop(?:s|ped)?\b', r'\bplung(?:e|es|ed)\b',
        r'\btumbl(?:e|es|ed)\b', r'\bslid(?:e|es)?\b', r'\bsink(?:s)?\b', r'\bsank\b',
        r'\bcrash(?:es|ed)?\b', r'sell-?off', r'\bslump(?:s|ed)?\b', r'\bdeclin(?:e|es|ed)\b',
    ])),
]

CATEGORY_TOPICS: Dict[TopicLabel, set] = {
    TopicLabel.EARNINGS: EARNINGS_CATEGORIES,
    TopicLabel.COMMODITIES: COMMODITY_CATEGORIES,
    TopicLabel.MACRO: MACRO_CATEGORIES,
}

IMPACT_PATTERNS: List[Tuple[ImpactLabel, re.Pattern]] = [
    (ImpactLabel.MARKET_MOVING, _compile([
        r'\bbreaking\b', r'\balert\b', r'\bjust in\b', r'\burgent\b', r'\bflash\b',
    ])),
    (ImpactLabel.HIGH_IMPACT, _compile([
        r'\bsurg(?:e|es|ed)\b', r'\bsoar(?:s|ed)?\b', r'\bplung(?:e|es|ed)\b',
        r'\bcrash(?:es|ed)?\b', r'\brecord\b', r'\btumbl(?:e|es|ed)\b',
        r'\bskyrocket(?:s|ed)?\b', r'\bcollaps(?:e|es|ed)\b',
    ])),
    (ImpactLabel.ANALYST_SIGNAL, _compile([
        r'\bupgrad(?:e|es|ed)\b', r'\bdowngrad(?:e|es|ed)\b', r'price target',
        r'\bguidance\b', r'\boutlook\b', r'initiates coverage',
    ])),
]


def classify_topic(text: Optional[str], category: Optional[str] = "") -> TopicLabel:
    """
    Pick the display topic for a headline.

    Args:
        text: Headline text
        category: Feed category hint (e.g. "earnings", "crypto")

    Returns:
        First matching TopicLabel, NEWS when nothing matches
    """
    text = text or ""
    cat = (category or "").strip().lower()

    for label, pattern in TOPIC_PATTERNS:
        if cat and cat in CATEGORY_TOPICS.get(label, ()):
            return label
        if pattern.search(text):
            return label
    return TopicLabel.NEWS


def classify_impact(text: Optional[str]) -> Optional[ImpactLabel]:
    """Urgency badge for a headline, or None."""
    text = text or ""
    for label, pattern in IMPACT_PATTERNS:
        if pattern.search(text):
            return label
    return None
