"""
Highlighter - Link matched instruments inside the original headline text.

Re-scans the headline with only the patterns that could have produced each
match, then keeps a non-overlapping subset of hits (earliest first, longest
on ties) and cuts the text into plain and linked segments.
"""

from typing import List, Optional, Sequence, Union
from dataclasses import dataclass
import re
import logging

from .extractor import InstrumentMatch, theme_rules_for
from .lexicon import COMPANY_ENTITIES, THEME_ETFS, build_phrase_regex

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HighlightSpan:
    """A linked slice of the headline: text == headline[start:end]."""
    start: int
    end: int
    text: str
    symbol: str

    @property
    def length(self) -> int:
        return self.end - self.start

    def to_dict(self) -> dict:
        return {
            "start": self.start,
            "end": self.end,
            "text": self.text,
            "symbol": self.symbol,
        }


Segment = Union[str, HighlightSpan]


def select_non_overlapping(hits: Sequence[HighlightSpan]) -> List[HighlightSpan]:
    """
    Greedy interval selection.

    Hits are ordered by start ascending, then length descending; a hit is
    kept only if it starts at or after the end of the last kept hit.
    """
    ordered = sorted(hits, key=lambda h: (h.start, -h.length))
    kept: List[HighlightSpan] = []
    last_end = 0
    for hit in ordered:
        if hit.length <= 0:
            continue
        if hit.start >= last_end:
            kept.append(hit)
            last_end = hit.end
    return kept


def ticker_pattern(symbol: str) -> re.Pattern:
    """Ticker as written in text: $SYM or bare SYM (bare only for 2+ letters)."""
    escaped = re.escape(symbol)
    if len(symbol) == 1:
        return re.compile(rf'(?<![\w$])\${escaped}\b')
    return re.compile(rf'(?<![\w$])\$?{escaped}\b')


class Highlighter:
    """Build clickable segments for a headline and its matches."""

    def patterns_for(self, symbol: str) -> List[re.Pattern]:
        """Every pattern that could have produced a match for symbol."""
        patterns: List[re.Pattern] = []

        company = build_phrase_regex(COMPANY_ENTITIES.get(symbol, []), possessive=True)
        if company is not None:
            patterns.append(company)

        theme = build_phrase_regex(THEME_ETFS.get(symbol, []))
        if theme is not None:
            patterns.append(theme)

        strong = [p for rule in theme_rules_for(symbol) for p in rule.strong_phrases]
        strong_re = build_phrase_regex(strong)
        if strong_re is not None:
            patterns.append(strong_re)

        patterns.append(ticker_pattern(symbol))
        return patterns

    def highlight(
        self,
        text: Optional[str],
        matches: Sequence[InstrumentMatch] = (),
    ) -> List[Segment]:
        """
        Split a headline into plain strings and HighlightSpans.

        Args:
            text: Original headline text
            matches: Instruments extracted from the same headline

        Returns:
            Segments whose concatenated text equals the input
        """
        text = text or ""
        if not text or not matches:
            return [text]

        hits: List[HighlightSpan] = []
        for match in matches:
            for pattern in self.patterns_for(match.symbol):
                for m in pattern.finditer(text):
                    hits.append(HighlightSpan(m.start(), m.end(), m.group(0), match.symbol))

        kept = select_non_overlapping(hits)
        if not kept:
            return [text]

        segments: List[Segment] = []
        cursor = 0
        for span in kept:
            if span.start > cursor:
                segments.append(text[cursor:span.start])
            segments.append(span)
            cursor = span.end
        if cursor < len(text):
            segments.append(text[cursor:])
        return segments


def segments_text(segments: Sequence[Segment]) -> str:
    """Reassemble the original text from segments."""
    return ''.join(s.text if isinstance(s, HighlightSpan) else s for s in segments)


def segments_to_dicts(segments: Sequence[Segment]) -> List[dict]:
    """JSON-friendly rendering: plain text parts carry no symbol."""
    out = []
    for s in segments:
        if isinstance(s, HighlightSpan):
            out.append(s.to_dict())
        else:
            out.append({"text": s, "symbol": None})
    return out


_default_highlighter = Highlighter()


def highlight(text: Optional[str], matches: Sequence[InstrumentMatch] = ()) -> List[Segment]:
    """Highlight with the default highlighter."""
    return _default_highlighter.highlight(text, matches)
