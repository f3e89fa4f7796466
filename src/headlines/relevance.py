"""
Relevance Classifier - Decide whether a headline belongs in a markets-only view.

Strict allow-list: a headline is kept only when at least one positive signal
fires. The suppression list never keeps anything; it only explains why a
headline with no signal was hidden.
"""

from typing import List, Optional, Sequence, Tuple
from dataclasses import dataclass, field
from enum import Enum
import re
import logging

from .extractor import InstrumentMatch

logger = logging.getLogger(__name__)


class SignalKind(Enum):
    """Reasons a headline can be kept."""
    TICKER = "ticker"
    ETF = "etf"
    MACRO = "macro"
    EQUITY = "equity"
    POLICY = "policy"


@dataclass(frozen=True)
class RelevanceSignal:
    """A named reason a headline was kept."""
    kind: SignalKind
    symbol: Optional[str] = None

    def __str__(self) -> str:
        if self.symbol:
            return f"{self.kind.value}:{self.symbol}"
        return self.kind.value


@dataclass
class RelevanceDecision:
    """Keep/hide decision with the signals behind it."""
    keep: bool
    signals: List[RelevanceSignal] = field(default_factory=list)
    reason: Optional[str] = None

    @property
    def signal_names(self) -> List[str]:
        return [str(s) for s in self.signals]

    def to_dict(self) -> dict:
        return {
            "keep": self.keep,
            "signals": self.signal_names,
            "reason": self.reason,
        }


class RelevanceClassifier:
    """
    Classify headlines for market relevance.

    Positive signals (each tested independently):
    1. Equity matches from the extractor -> ticker:<SYMBOL>
    2. ETF matches from the extractor -> etf:<SYMBOL>
    3. Macro terms (Fed, rates, inflation, jobs, yields, GDP...)
    4. Equity / market-structure terms (stocks, earnings, IPO, rally...)
    5. Policy / supply-chain terms (tariffs, sanctions, OPEC, shipping...)
    """

    MACRO_PATTERNS = [
        r'\bfed\b', r'federal reserve', r'\bfomc\b', r'\bpowell\b',
        r'interest rates?', r'rate (?:cut|cuts|hike|hikes|hold|decision)',
        r'inflation', r'deflation', r'\bcpi\b', r'\bppi\b', r'\bpce\b',
        r'jobs report', r'payrolls?', r'unemployment', r'jobless claims',
        r'treasury yields?', r'bond yields?', r'\byields?\b',
        r'recession', r'\bgdp\b', r'central bank', r'\becb\b', r'\bboj\b',
        r'consumer prices', r'retail sales', r'soft landing',
    ]

    EQUITY_PATTERNS = [
        r'\bstocks?\b', r'\bshares?\b', r'\bequit(?:y|ies)\b',
        r'\bindex(?:es)?\b', r'\bindices\b', r's&p', r'\bnasdaq\b', r'\bdow\b',
        r'wall street', r'\bearnings\b', r'\brevenue\b', r'\bprofits?\b',
        r'\bipo\b', r'buybacks?', r'dividends?', r'\bmergers?\b',
        r'acquisitions?', r'\bacquires?\b', r'takeover', r'valuation',
        r'market cap', r'\brall(?:y|ies|ied)\b', r'sell-?off', r'\bcrash(?:es|ed)?\b',
        r'\bplunges?\b', r'\bsurges?\b', r'\bsoars?\b', r'\btumbles?\b',
        r'\bupgrades?\b', r'\bdowngrades?\b', r'price target', r'\binvestors?\b',
        r'bull market', r'bear market', r'\bguidance\b',
    ]

    POLICY_PATTERNS = [
        r'tariffs?', r'sanctions?', r'export controls?', r'chip bans?',
        r'trade war', r'embargo', r'\bopec\b', r'\bcrude\b', r'oil prices?',
        r'shipping disruptions?', r'supply chains?', r'red sea',
        r'strait of hormuz', r'export bans?', r'antitrust',
    ]

    # Non-market topics: explanatory only
    SUPPRESSION_PATTERNS = [
        r'\btips?\b', r'\bhow to\b', r'\bways to\b', r'\bvacation', r'\btravel\b',
        r'\brecipes?\b', r'\bcelebrit(?:y|ies)\b', r'\bhoroscope', r'\bdating\b',
        r'\bwedding', r'\bdivorce', r'personal finance', r'credit score',
        r'\bsave (?:money|on)\b', r'\bbudgeting\b', r'\bfrugal', r'\bretire(?:ment)? (?:advice|tips)\b',
        r'\bmovies?\b', r'\bbox office\b', r'\btv show', r'\bstreaming series\b',
        r'\bnfl\b', r'\bnba\b', r'\bmlb\b', r'\bsuper bowl\b', r'\bplayoffs?\b',
        r'\bcampaign trail\b', r'\bpolls?\b', r'\bsenator\b', r'\bgovernor\b',
        r'\bpolitics\b', r'\bquiz\b', r'\bopinion\b',
    ]

    def __init__(self):
        """Compile the signal and suppression patterns once."""
        self._macro_re = self._compile(self.MACRO_PATTERNS)
        self._equity_re = self._compile(self.EQUITY_PATTERNS)
        self._policy_re = self._compile(self.POLICY_PATTERNS)
        self._suppression_re = self._compile(self.SUPPRESSION_PATTERNS)

    @staticmethod
    def _compile(patterns: Sequence[str]) -> re.Pattern:
        return re.compile('|'.join(f'(?:{p})' for p in patterns), re.IGNORECASE)

    def classify(
        self,
        text: Optional[str],
        matches: Sequence[InstrumentMatch] = (),
    ) -> RelevanceDecision:
        """
        Apply the allow-list policy to a headline.

        Args:
            text: Headline text
            matches: Instruments already extracted from the headline

        Returns:
            RelevanceDecision; keep is True exactly when signals is non-empty
        """
        text = text or ""
        signals: List[RelevanceSignal] = []

        for match in matches or ():
            if match.is_etf:
                signals.append(RelevanceSignal(SignalKind.ETF, match.symbol))
            else:
                signals.append(RelevanceSignal(SignalKind.TICKER, match.symbol))

        if self._macro_re.search(text):
            signals.append(RelevanceSignal(SignalKind.MACRO))
        if self._equity_re.search(text):
            signals.append(RelevanceSignal(SignalKind.EQUITY))
        if self._policy_re.search(text):
            signals.append(RelevanceSignal(SignalKind.POLICY))

        if signals:
            return RelevanceDecision(
                keep=True,
                signals=signals,
                reason="Market signals: " + ", ".join(str(s) for s in signals),
            )

        suppressed = self._suppression_re.search(text)
        if suppressed:
            reason = f"No market signal; suppression list matched '{suppressed.group(0)}'"
        else:
            reason = "No market signal"
        logger.debug(f"Hidden: {text[:50]}... ({reason})")
        return RelevanceDecision(keep=False, signals=[], reason=reason)

    def suppression_hit(self, text: Optional[str]) -> Optional[str]:
        """Return the suppression phrase found in text, if any."""
        m = self._suppression_re.search(text or "")
        return m.group(0) if m else None

    def batch_classify(
        self,
        items: Sequence[Tuple[str, Sequence[InstrumentMatch]]],
    ) -> Tuple[List[RelevanceDecision], int]:
        """
        Classify a batch of (text, matches) pairs.

        Returns:
            Tuple of (decisions, kept_count)
        """
        decisions = [self.classify(text, matches) for text, matches in items]
        kept = sum(1 for d in decisions if d.keep)
        logger.info(
            f"Relevance filter: {kept} kept, {len(decisions) - kept} hidden "
            f"({kept/(len(decisions) or 1)*100:.1f}% pass rate)"
        )
        return decisions, kept


_default_classifier = RelevanceClassifier()


def classify(text: Optional[str], matches: Sequence[InstrumentMatch] = ()) -> RelevanceDecision:
    """Classify with the default classifier."""
    return _default_classifier.classify(text, matches)
