"""
Headline Lexicon - Static lookup tables for instrument extraction.

Everything here is built once at import time and never mutated:
- Ticker syntax and the common-word blacklist
- Whitelist of well-known tickers accepted as bare words
- Company names and theme phrases (with longest-first alternation regexes)
- Theme-inference rules (strong phrases, weak keyword clusters)
- Sector groups used for display
"""

from dataclasses import dataclass
from typing import Dict, FrozenSet, List, Optional, Tuple
import re


# ============================================================
# TICKER SYNTAX
# ============================================================

TICKER_RE: re.Pattern = re.compile(r'^[A-Z]{1,5}$')

DOLLAR_TICKER_RE: re.Pattern = re.compile(r'(?<![\w$])\$([A-Z]{1,5})\b')

# "(NASDAQ: TSLA)", "(NYSE American: XYZ)", "(AAPL)"
PAREN_TICKER_RE: re.Pattern = re.compile(
    r'\(\s*'
    r'(?:(?P<exchange>(?i:nasdaq|nyse\s+american|nyse\s*arca|nyse|amex|cboe))\s*:\s*)?'
    r'\$?(?P<symbol>[A-Z]{1,5})'
    r'\s*\)'
)

# Separators used when scanning for bare ticker words
TOKEN_SPLIT_RE: re.Pattern = re.compile(r'[\s,.:;!?\'’"()\-/]+')


# Common words that look like tickers but aren't
TICKER_BLACKLIST: FrozenSet[str] = frozenset({
    'A', 'I', 'AM', 'AN', 'AS', 'AT', 'BE', 'BY', 'DO', 'GO', 'HE', 'IF', 'IN', 'IS', 'IT',
    'ME', 'MY', 'NO', 'OF', 'OK', 'ON', 'OR', 'OUR', 'SO', 'TO', 'UP', 'US', 'WE',
    'ALL', 'AND', 'ANY', 'ARE', 'BIG', 'BUT', 'CAN', 'CEO', 'CFO', 'COO', 'CTO',
    'DAY', 'DID', 'EPS', 'ETF', 'FAQ', 'FOR', 'GDP', 'GET', 'GOT', 'HAS', 'HER', 'HIM',
    'HIS', 'HOW', 'IPO', 'IRS', 'ITS', 'LET', 'MAY', 'MOM', 'NBA', 'NEW', 'NFL', 'NOT',
    'NOW', 'NYC', 'OLD', 'ONE', 'OUT', 'OWN', 'PAY', 'PUT', 'RAN', 'RUN', 'SAY', 'SEC',
    'SET', 'SHE', 'TAX', 'THE', 'TOP', 'TRY', 'TWO', 'USA', 'USE', 'WAS', 'WAY', 'WHO',
    'WHY', 'WIN', 'WON', 'YES', 'YET', 'YOU',
    'ALSO', 'BACK', 'BEEN', 'BEST', 'BOTH', 'COME', 'DOWN', 'EACH', 'EVEN', 'FIND',
    'FROM', 'GAVE', 'GOOD', 'HALF', 'HAVE', 'HERE', 'HIGH', 'HOME', 'INTO',
    'JUST', 'KEEP', 'LAST', 'LIKE', 'LONG', 'LOOK', 'MADE', 'MAKE', 'MANY', 'MEME',
    'MORE', 'MOST', 'MUCH', 'MUST', 'NEXT', 'ONLY', 'OPEN', 'OVER', 'PART', 'PLAN',
    'POST', 'RATE', 'REAL', 'SAID', 'SAME', 'SALE', 'SAYS', 'SELL', 'SHOW', 'SIDE',
    'SOME', 'STAR', 'STOP', 'SUCH', 'TAKE', 'TALK', 'TELL', 'THAN', 'THAT', 'THEM',
    'THEN', 'THEY', 'THIS', 'TIME', 'TOLD', 'VERY', 'WANT', 'WEEK', 'WELL', 'WERE',
    'WHAT', 'WHEN', 'WILL', 'WITH', 'WORK', 'YEAR', 'YOUR',
    'ABOUT', 'AFTER', 'COULD', 'FIRST', 'GREAT', 'LARGE', 'MONEY', 'NEVER',
    'OTHER', 'BEING', 'EVERY', 'STOCK', 'SHARE', 'PRICE', 'TRADE', 'INDEX',
})

# Acronyms that show up in parentheses but are not listings
PARENTHETICAL_EXCLUSIONS: FrozenSet[str] = frozenset({
    'FDA', 'EMA', 'FTC', 'DOJ', 'EPA', 'WHO', 'CDC', 'FOMC', 'ECB', 'BOJ', 'IMF',
    'OPEC', 'NATO', 'EU', 'UK', 'UN', 'AI', 'EV', 'ESMO', 'ASCO', 'AACR',
    'NYSE', 'AMEX', 'CBOE',
    # economic indicators and reporting shorthand
    'CPI', 'GDP', 'PCE', 'PPI', 'PMI', 'ISM', 'FED', 'YOY', 'QOQ', 'MOM', 'BPS',
    'SEC', 'IPO', 'ETF', 'CEO', 'CFO', 'COO', 'CTO',
})


# Well-known tickers accepted as bare words in headline text.
# Single-letter symbols (V, F, C, ...) are left out: as bare words they collide
# with initials and abbreviations ("U.S.", "Series C").
KNOWN_TICKERS: FrozenSet[str] = frozenset({
    'AAPL', 'MSFT', 'GOOGL', 'GOOG', 'AMZN', 'NVDA', 'META', 'TSLA',
    'JPM', 'JNJ', 'WMT', 'PG', 'MA', 'UNH', 'HD', 'DIS', 'BAC',
    'XOM', 'KO', 'PFE', 'PEP', 'CSCO', 'NFLX', 'INTC', 'AMD', 'CRM',
    'ADBE', 'PYPL', 'QCOM', 'TXN', 'AVGO', 'COST', 'MRK', 'ABT', 'TMO',
    'ORCL', 'CVX', 'LLY', 'MCD', 'NKE', 'SBUX', 'BABA', 'SQ', 'SHOP',
    'UBER', 'LYFT', 'SNAP', 'PINS', 'ROKU', 'ZM', 'DOCU', 'SNOW', 'PLTR',
    'COIN', 'RIVN', 'LCID', 'SOFI', 'HOOD', 'ARM', 'SMCI', 'MSTR',
    'BA', 'GM', 'GE', 'CAT', 'IBM', 'GS', 'MS', 'WFC', 'AXP',
    'TGT', 'LOW', 'UPS', 'FDX', 'ABNB', 'DASH', 'CRWD', 'DDOG', 'MRNA', 'GILD',
    'MU', 'AMAT', 'LRCX', 'SPOT', 'DKNG', 'RBLX', 'TWLO', 'TSM', 'ASML',
    'SPY', 'QQQ', 'IWM', 'DIA', 'VTI', 'VOO', 'SOXX', 'SMH', 'GDX', 'GLD',
})

# Broad-market index ETFs; never shown next to a specific company
BROAD_MARKET_ETFS: FrozenSet[str] = frozenset({
    'SPY', 'QQQ', 'DIA', 'IWM', 'VTI', 'VOO',
})

# Funds recognised as ETFs wherever they are found
KNOWN_ETFS: FrozenSet[str] = BROAD_MARKET_ETFS | frozenset({
    'SCHD', 'VEA', 'VWO', 'EEM', 'EFA', 'INDA', 'FXI', 'IEMG',
    'XLF', 'XLK', 'XLE', 'XLV', 'XLI', 'XLP', 'XLY', 'XLU', 'XLC', 'XLRE', 'XLB',
    'ARKK', 'ARKG', 'ARKW', 'ARKF',
    'VGT', 'SOXX', 'SMH', 'XBI', 'IBB', 'NLR', 'KRE', 'ITA', 'KWEB', 'XHB',
    'GLD', 'SLV', 'GDX', 'USO', 'TAN', 'ICLN', 'LIT', 'BOTZ', 'IBIT',
    'BND', 'AGG', 'TLT', 'HYG', 'LQD', 'VCSH', 'VCIT',
    'TQQQ', 'SQQQ', 'SPXL', 'UPRO', 'SOXL', 'SOXS', 'VNQ',
})


# ============================================================
# COMPANY NAMES
# ============================================================

COMPANY_ENTITIES: Dict[str, List[str]] = {
    'AAPL': ['apple'],
    'MSFT': ['microsoft'],
    'GOOGL': ['google', 'alphabet'],
    'AMZN': ['amazon'],
    'NVDA': ['nvidia'],
    'META': ['meta', 'meta platforms', 'facebook'],
    'TSLA': ['tesla'],
    'NFLX': ['netflix'],
    'DIS': ['disney', 'walt disney'],
    'BA': ['boeing'],
    'INTC': ['intel'],
    'AMD': ['amd', 'advanced micro devices'],
    'CRM': ['salesforce'],
    'ADBE': ['adobe'],
    'PYPL': ['paypal'],
    'WMT': ['walmart'],
    'COST': ['costco'],
    'SBUX': ['starbucks'],
    'ORCL': ['oracle'],
    'CVX': ['chevron'],
    'XOM': ['exxon', 'exxonmobil', 'exxon mobil'],
    'JPM': ['jpmorgan', 'jp morgan', 'jpmorgan chase'],
    'BAC': ['bank of america', 'bofa'],
    'GS': ['goldman sachs', 'goldman'],
    'MS': ['morgan stanley'],
    'WFC': ['wells fargo'],
    'C': ['citigroup'],
    'AXP': ['american express'],
    'V': ['visa'],
    'MA': ['mastercard'],
    'COIN': ['coinbase'],
    'PLTR': ['palantir'],
    'SNOW': ['snowflake'],
    'UBER': ['uber'],
    'SHOP': ['shopify'],
    'HOOD': ['robinhood'],
    'RIVN': ['rivian'],
    'LCID': ['lucid', 'lucid motors'],
    'ABNB': ['airbnb'],
    'MRNA': ['moderna'],
    'PFE': ['pfizer'],
    'LLY': ['eli lilly'],
    'JNJ': ['johnson & johnson'],
    'UNH': ['unitedhealth'],
    'CRWD': ['crowdstrike'],
    'SPOT': ['spotify'],
    'MU': ['micron'],
    'AVGO': ['broadcom'],
    'QCOM': ['qualcomm'],
    'TSM': ['tsmc', 'taiwan semiconductor'],
    'ASML': ['asml'],
    'ARM': ['arm holdings'],
    'SMCI': ['super micro', 'supermicro'],
    'MSTR': ['microstrategy'],
    'BABA': ['alibaba'],
    'KO': ['coca-cola'],
    'PEP': ['pepsico'],
    'MCD': ['mcdonald'],
    'NKE': ['nike'],
    'F': ['ford'],
    'GM': ['general motors'],
    'GE': ['general electric'],
    'IBM': ['ibm'],
    'T': ['at&t'],
    'HD': ['home depot'],
    'DKNG': ['draftkings'],
}


# ============================================================
# THEME PHRASES -> ETF
# ============================================================

THEME_ETFS: Dict[str, List[str]] = {
    'SOXX': ['semiconductor', 'semiconductors', 'chipmaker', 'chipmakers',
             'chip stocks', 'chip sector'],
    'GDX': ['gold miner', 'gold miners', 'gold mining'],
    'GLD': ['gold', 'gold price', 'gold prices', 'bullion'],
    'SLV': ['silver'],
    'USO': ['oil', 'oil price', 'oil prices', 'crude', 'crude oil'],
    'XLE': ['energy stocks', 'energy sector', 'oil majors'],
    'XLF': ['bank stocks', 'banking sector', 'financial stocks'],
    'KRE': ['regional banks', 'regional lenders'],
    'XBI': ['biotech', 'biotech stocks'],
    'ICLN': ['clean energy', 'renewable energy'],
    'TAN': ['solar stocks', 'solar'],
    'LIT': ['lithium', 'battery makers'],
    'XHB': ['homebuilders', 'homebuilder'],
    'TLT': ['treasuries', 'bond market'],
    'IWM': ['small caps', 'small-cap stocks', 'russell 2000'],
    'XLK': ['tech stocks', 'technology stocks', 'tech sector'],
    'ITA': ['defense stocks', 'defense contractors'],
    'KWEB': ['china tech', 'chinese tech'],
    'IBIT': ['bitcoin'],
    'SPY': ['s&p 500'],
    'QQQ': ['nasdaq 100'],
    'DIA': ['dow jones'],
}


# ============================================================
# THEME INFERENCE RULES
# ============================================================

@dataclass(frozen=True)
class ThemeRule:
    """
    Infer an ETF from topical language.

    A single strong phrase is enough; otherwise at least
    WEAK_KEYWORD_MIN_HITS distinct weak keywords must appear.
    """
    etf: str
    strong_phrases: Tuple[str, ...]
    weak_keywords: Tuple[str, ...]


THEME_RULES: Tuple[ThemeRule, ...] = (
    ThemeRule(
        etf='SOXX',
        strong_phrases=('ai chip boom', 'chip war', 'chip shortage', 'chip export', 'semiconductor rally'),
        weak_keywords=('chip', 'chips', 'ai', 'gpu', 'gpus', 'wafer', 'foundry', 'data center', 'data centers'),
    ),
    ThemeRule(
        etf='GDX',
        strong_phrases=('gold rush', 'gold miners rally'),
        weak_keywords=('gold', 'miner', 'miners', 'mining', 'bullion', 'ounce'),
    ),
    ThemeRule(
        etf='USO',
        strong_phrases=('oil shock', 'oil spike', 'opec cut', 'opec+ cut', 'production cut'),
        weak_keywords=('barrel', 'barrels', 'opec', 'brent', 'wti', 'refinery', 'pipeline', 'drilling'),
    ),
    ThemeRule(
        etf='ICLN',
        strong_phrases=('clean energy push', 'renewables boom', 'green energy'),
        weak_keywords=('solar', 'wind', 'renewable', 'renewables', 'emissions', 'climate', 'hydrogen'),
    ),
    ThemeRule(
        etf='XBI',
        strong_phrases=('biotech rally', 'drug pricing'),
        weak_keywords=('fda', 'drug', 'trial', 'vaccine', 'therapy', 'biotech', 'pharma'),
    ),
    ThemeRule(
        etf='ITA',
        strong_phrases=('defense spending', 'military aid', 'arms deal'),
        weak_keywords=('defense', 'military', 'missile', 'missiles', 'pentagon', 'nato', 'weapons'),
    ),
    ThemeRule(
        etf='KRE',
        strong_phrases=('bank run', 'regional bank', 'deposit flight'),
        weak_keywords=('bank', 'banks', 'deposits', 'lender', 'lenders', 'loans', 'credit'),
    ),
)


# ============================================================
# SECTORS (display only)
# ============================================================

SECTOR_GROUPS: Dict[str, List[str]] = {
    'Tech': [
        'AAPL', 'MSFT', 'GOOGL', 'GOOG', 'META', 'AMZN', 'NVDA',
        'AMD', 'INTC', 'TSM', 'ASML', 'AVGO', 'QCOM', 'TXN', 'MU',
        'AMAT', 'LRCX', 'ARM', 'SMCI', 'CRM', 'ORCL', 'ADBE', 'SNOW',
        'PLTR', 'SHOP', 'ZM', 'DOCU', 'DDOG', 'CRWD', 'CSCO', 'IBM',
        'NFLX', 'UBER', 'ABNB', 'DASH', 'COIN', 'SQ', 'PYPL', 'SNAP',
        'PINS', 'RBLX', 'SPOT', 'BABA', 'LYFT', 'TWLO', 'MSTR',
    ],
    'Finance': [
        'JPM', 'BAC', 'WFC', 'GS', 'MS', 'C', 'V', 'MA', 'AXP', 'HOOD', 'SOFI',
    ],
    'Healthcare': [
        'JNJ', 'PFE', 'MRK', 'LLY', 'GILD', 'MRNA', 'TMO', 'ABT', 'UNH',
    ],
    'Energy': ['XOM', 'CVX'],
    'Consumer': [
        'WMT', 'PG', 'KO', 'PEP', 'COST', 'HD', 'LOW', 'TGT', 'NKE',
        'MCD', 'SBUX', 'TSLA', 'GM', 'F', 'RIVN', 'LCID', 'DKNG',
    ],
    'Industrial': ['BA', 'GE', 'CAT', 'UPS', 'FDX'],
    'Communication': ['DIS', 'ROKU', 'T'],
    'ETF/Index': sorted(KNOWN_ETFS),
}


# ============================================================
# COMPILED LOOKUPS
# ============================================================

def _invert(groups: Dict[str, List[str]]) -> Dict[str, str]:
    """Map each lowercase phrase to the symbol that owns it."""
    return {
        phrase.lower(): symbol
        for symbol, phrases in groups.items()
        for phrase in phrases
    }


def longest_first(phrases) -> List[str]:
    """Sort phrases longest first so alternations prefer multi-word names."""
    return sorted(phrases, key=lambda p: (-len(p), p))


def build_phrase_regex(phrases, possessive: bool = False) -> Optional[re.Pattern]:
    """
    Build a case-insensitive, word-bounded alternation over phrases.

    Args:
        phrases: Phrases to match; sorted longest first before joining
        possessive: Also consume a trailing "'s"

    Returns:
        Compiled pattern, or None when there is nothing to match
    """
    ordered = longest_first(set(phrases))
    if not ordered:
        return None
    suffix = r"(?:['’]s)?" if possessive else ''
    alternation = '|'.join(re.escape(p) for p in ordered)
    return re.compile(rf'(?<!\w)(?:{alternation}){suffix}(?!\w)', re.IGNORECASE)


COMPANY_TO_TICKER: Dict[str, str] = _invert(COMPANY_ENTITIES)
THEME_TO_ETF: Dict[str, str] = _invert(THEME_ETFS)

COMPANY_RE: re.Pattern = build_phrase_regex(COMPANY_TO_TICKER, possessive=True)
THEME_RE: re.Pattern = build_phrase_regex(THEME_TO_ETF)

# Each rule's strong phrases as one regex, weak keywords individually
THEME_RULE_PATTERNS: Tuple[Tuple[ThemeRule, re.Pattern, Tuple[re.Pattern, ...]], ...] = tuple(
    (
        rule,
        build_phrase_regex(rule.strong_phrases),
        tuple(re.compile(rf'(?<!\w){re.escape(k)}(?!\w)') for k in rule.weak_keywords),
    )
    for rule in THEME_RULES
)

SECTOR_BY_SYMBOL: Dict[str, str] = {
    symbol: sector
    for sector, symbols in SECTOR_GROUPS.items()
    for symbol in symbols
}


def strip_possessive(name: str) -> str:
    """Drop a trailing possessive so "Tesla's" looks up as "tesla"."""
    lowered = name.lower()
    if lowered.endswith("'s") or lowered.endswith("’s"):
        return lowered[:-2]
    return lowered


def is_valid_ticker(token: str) -> bool:
    """1-5 uppercase letters."""
    return bool(TICKER_RE.match(token or ''))


def is_etf(symbol: str) -> bool:
    return symbol in KNOWN_ETFS


def sector_of(symbol: str) -> Optional[str]:
    """Display sector for a symbol, or None when unknown."""
    return SECTOR_BY_SYMBOL.get((symbol or '').upper())


def lexicon_stats() -> Dict[str, int]:
    """Sizes of the static tables."""
    return {
        'blacklist': len(TICKER_BLACKLIST),
        'known_tickers': len(KNOWN_TICKERS),
        'known_etfs': len(KNOWN_ETFS),
        'company_names': len(COMPANY_TO_TICKER),
        'theme_phrases': len(THEME_TO_ETF),
        'theme_rules': len(THEME_RULES),
    }
