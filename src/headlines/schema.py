"""
Schema definitions for headline feed records.

Pydantic model for:
- HeadlineRecord: One normalized headline as delivered by the news feed
"""

from datetime import datetime
from typing import Any, Optional

import pytz
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class HeadlineRecord(BaseModel):
    """
    A single headline from the news feed.

    Accepts the feed's own field names (headline, related, datetime) as well
    as the internal ones (text, related_symbols, timestamp).
    """
    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    id: Optional[str] = None
    text: str = Field(default="", validation_alias=AliasChoices('text', 'headline'))
    related_symbols: str = Field(default="", validation_alias=AliasChoices('related_symbols', 'related'))
    category: str = ""
    timestamp: Optional[datetime] = Field(default=None, validation_alias=AliasChoices('timestamp', 'datetime'))
    source: str = ""
    url: str = ""

    @field_validator('id', mode='before')
    @classmethod
    def stringify_id(cls, v):
        if v is None or isinstance(v, str):
            return v
        return str(v)

    @field_validator('text', 'category', 'source', 'url', mode='before')
    @classmethod
    def none_to_empty(cls, v):
        return "" if v is None else v

    @field_validator('related_symbols', mode='before')
    @classmethod
    def join_related(cls, v):
        if v is None:
            return ""
        if isinstance(v, (list, tuple)):
            return ",".join(str(s) for s in v)
        return v

    @field_validator('timestamp', mode='before')
    @classmethod
    def parse_timestamp(cls, v: Any):
        """Unix seconds, ISO strings and datetimes all become UTC-aware."""
        if v is None or v == "":
            return None
        if isinstance(v, bool):
            raise ValueError("timestamp must be unix seconds, ISO string or datetime")
        if isinstance(v, (int, float)):
            try:
                return datetime.fromtimestamp(v, tz=pytz.UTC)
            except (OverflowError, OSError) as e:
                raise ValueError(f"timestamp out of range: {v}") from e
        if isinstance(v, str):
            stripped = v.strip()
            try:
                return datetime.fromtimestamp(float(stripped), tz=pytz.UTC)
            except (ValueError, OverflowError, OSError):
                v = datetime.fromisoformat(stripped.replace('Z', '+00:00'))
        if isinstance(v, datetime):
            if v.tzinfo is None:
                return pytz.UTC.localize(v)
            return v.astimezone(pytz.UTC)
        return v

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "text": self.text,
            "related_symbols": self.related_symbols,
            "category": self.category,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
            "source": self.source,
            "url": self.url,
        }
