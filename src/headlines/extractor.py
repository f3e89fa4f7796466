"""
Entity Extraction - Find the instruments a headline is about.

Turns one headline (plus the feed's optional related-symbols hint) into at most
two instrument matches, equities ahead of theme ETFs.
"""

from typing import Dict, List, Optional
from dataclasses import dataclass
from enum import Enum
import logging

import config
from .lexicon import (
    BROAD_MARKET_ETFS,
    COMPANY_RE,
    COMPANY_TO_TICKER,
    DOLLAR_TICKER_RE,
    KNOWN_TICKERS,
    PAREN_TICKER_RE,
    PARENTHETICAL_EXCLUSIONS,
    THEME_RE,
    THEME_RULE_PATTERNS,
    THEME_TO_ETF,
    TICKER_BLACKLIST,
    TOKEN_SPLIT_RE,
    ThemeRule,
    is_etf,
    is_valid_ticker,
    sector_of,
    strip_possessive,
)

logger = logging.getLogger(__name__)


class InstrumentKind(Enum):
    """What kind of instrument a match refers to."""
    EQUITY = "equity"
    ETF = "etf"


@dataclass(frozen=True)
class InstrumentMatch:
    """One instrument extracted from a headline."""
    symbol: str
    kind: InstrumentKind

    @property
    def is_etf(self) -> bool:
        return self.kind is InstrumentKind.ETF

    def to_dict(self) -> dict:
        return {
            "symbol": self.symbol,
            "kind": self.kind.value,
            "sector": sector_of(self.symbol),
        }


class EntityExtractor:
    """
    Rule-based instrument extractor for news headlines.

    Sources, in priority order:
    1. Related-symbols hint from the feed
    2. $TICKER
    3. (EXCHANGE: TICKER) / (TICKER)
    4. Bare well-known tickers
    5. Company names
    6. Theme / sector phrases -> ETF
    7. Theme inference (only while fewer than two entities are known)
    """

    def __init__(
        self,
        max_matches: int = config.MAX_INSTRUMENTS_PER_HEADLINE,
        weak_keyword_min_hits: int = config.WEAK_KEYWORD_MIN_HITS,
    ):
        """
        Initialize extractor.

        Args:
            max_matches: Cap on instruments per headline (never above 2)
            weak_keyword_min_hits: Distinct weak keywords needed for theme inference
        """
        self.max_matches = max(0, min(max_matches, config.MAX_INSTRUMENTS_PER_HEADLINE))
        # A lone weak keyword must never be enough
        self.weak_keyword_min_hits = max(2, weak_keyword_min_hits)

    def extract(self, text: Optional[str], related_symbols: Optional[str] = "") -> List[InstrumentMatch]:
        """
        Extract up to two instruments from a headline.

        Args:
            text: Raw headline text
            related_symbols: Comma-separated symbol hint (may be empty)

        Returns:
            Ordered list of InstrumentMatch, equities first
        """
        text = text or ""
        # dicts double as insertion-ordered sets
        exact: Dict[str, None] = {}
        etfs: Dict[str, None] = {}

        for symbol in self._from_related(related_symbols or ""):
            exact.setdefault(symbol)
        for symbol in self._from_dollar(text):
            exact.setdefault(symbol)
        for symbol in self._from_parentheses(text):
            exact.setdefault(symbol)
        for symbol in self._from_bare_words(text):
            exact.setdefault(symbol)
        for symbol in self._from_company_names(text):
            exact.setdefault(symbol)
        for symbol in self._from_theme_phrases(text):
            etfs.setdefault(symbol)

        if len(exact) + len(etfs) < 2:
            inferred = self.infer_theme(text)
            if inferred:
                etfs.setdefault(inferred)

        return self._assemble(list(exact), list(etfs))

    def mentions(self, text: Optional[str]) -> List[str]:
        """
        Every symbol named in the text, uncapped.

        Counts $TICKER, well-known bare tickers and company names; the
        related-symbols hint and theme ETFs are not mentions.
        """
        text = text or ""
        found: Dict[str, None] = {}
        for source in (self._from_dollar, self._from_bare_words, self._from_company_names):
            for symbol in source(text):
                found.setdefault(symbol)
        return list(found)

    # ------------------------------------------------------------
    # Sources
    # ------------------------------------------------------------

    @staticmethod
    def _from_related(related_symbols: str) -> List[str]:
        symbols = []
        for raw in related_symbols.split(','):
            clean = raw.strip().upper()
            if is_valid_ticker(clean) and clean not in TICKER_BLACKLIST:
                symbols.append(clean)
        return symbols

    @staticmethod
    def _from_dollar(text: str) -> List[str]:
        return [m.group(1) for m in DOLLAR_TICKER_RE.finditer(text)]

    @staticmethod
    def _from_parentheses(text: str) -> List[str]:
        symbols = []
        for m in PAREN_TICKER_RE.finditer(text):
            symbol = m.group('symbol')
            if m.group('exchange'):
                symbols.append(symbol)
            elif symbol not in TICKER_BLACKLIST and symbol not in PARENTHETICAL_EXCLUSIONS:
                symbols.append(symbol)
        return symbols

    @staticmethod
    def _from_bare_words(text: str) -> List[str]:
        return [
            word for word in TOKEN_SPLIT_RE.split(text)
            if is_valid_ticker(word) and word in KNOWN_TICKERS
        ]

    @staticmethod
    def _from_company_names(text: str) -> List[str]:
        return [
            COMPANY_TO_TICKER[strip_possessive(m.group(0))]
            for m in COMPANY_RE.finditer(text)
        ]

    @staticmethod
    def _from_theme_phrases(text: str) -> List[str]:
        return [THEME_TO_ETF[m.group(0).lower()] for m in THEME_RE.finditer(text)]

    def infer_theme(self, text: str) -> Optional[str]:
        """
        Infer a single theme ETF from clustered keywords.

        Rules are tried in order; the first whose strong phrase matches, or
        whose distinct weak-keyword count reaches the threshold, wins.
        """
        lowered = (text or "").lower()
        for rule, strong_re, weak_patterns in THEME_RULE_PATTERNS:
            if strong_re is not None and strong_re.search(lowered):
                logger.debug(f"Theme {rule.etf}: strong phrase in {text[:50]!r}")
                return rule.etf
            hits = sum(1 for pattern in weak_patterns if pattern.search(lowered))
            if hits >= self.weak_keyword_min_hits:
                logger.debug(f"Theme {rule.etf}: {hits} weak keywords in {text[:50]!r}")
                return rule.etf
        return None

    # ------------------------------------------------------------
    # Assembly
    # ------------------------------------------------------------

    def _assemble(self, exact: List[str], etfs: List[str]) -> List[InstrumentMatch]:
        """
        Confidence-gated assembly.

        Equities fill slots first; exact-source ETFs follow; theme ETFs take
        whatever is left. Broad-market ETFs are dropped whenever an equity is
        present.
        """
        equities = [s for s in exact if not is_etf(s)]
        exact_etfs = [s for s in exact if is_etf(s)]

        candidates = [InstrumentMatch(s, InstrumentKind.EQUITY) for s in equities]
        candidates += [InstrumentMatch(s, InstrumentKind.ETF) for s in exact_etfs]
        candidates += [InstrumentMatch(s, InstrumentKind.ETF) for s in etfs]

        results: List[InstrumentMatch] = []
        seen = set()
        for match in candidates:
            if len(results) >= self.max_matches:
                break
            if match.symbol in seen:
                continue
            if equities and match.symbol in BROAD_MARKET_ETFS:
                continue
            seen.add(match.symbol)
            results.append(match)
        return results


def theme_rules_for(symbol: str) -> List[ThemeRule]:
    """Inference rules that can produce the given ETF."""
    return [rule for rule, _, _ in THEME_RULE_PATTERNS if rule.etf == symbol]


_default_extractor = EntityExtractor()


def extract(text: Optional[str], related_symbols: Optional[str] = "") -> List[InstrumentMatch]:
    """Extract instruments with the default extractor."""
    return _default_extractor.extract(text, related_symbols)
