"""
Content Cache Service - time-windowed cache of provider content.

Per (city, kind):
    EMPTY -> FRESH -> STALE -> (refill) -> FRESH

A read serves cached rows while the newest one is younger than the
validity window. Otherwise the provider is called once, its text is
parsed, and every parsed item is stored in one commit. Nothing is
stored when the provider call fails.

Parsing never fails a read: if no JSON array/object can be found in
the provider text, a single fallback item wraps the raw text.
"""

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Any, Callable, List, Optional

from flask import current_app

from ..extensions import db, atomic
from ..models import CachedContent, ContentKind
from .content_provider import get_content_provider
from .report_service import parse_enum, require_city

logger = logging.getLogger(__name__)


SOURCE_CACHE = 'cache'
SOURCE_PROVIDER = 'provider'

FALLBACK_TITLES = {
    ContentKind.NEWS: 'Waste Management Update',
    ContentKind.POLLUTION: 'Pollution Briefing',
}

_decoder = json.JSONDecoder()

# Bounds on the segment search over provider text
MAX_SCAN_CHARS = 100_000
MAX_DECODE_ATTEMPTS = 32


def extract_json_segment(text: str) -> Optional[Any]:
    """
    First syntactically valid JSON array or object embedded in text.

    Tries '[' / '{' positions left to right and returns the first one
    that decodes, or None. Only the first MAX_SCAN_CHARS characters
    and MAX_DECODE_ATTEMPTS start positions are tried. Nesting too deep
    for the decoder counts as a failed attempt.
    """
    if not text:
        return None
    text = text[:MAX_SCAN_CHARS]
    attempts = 0
    for index, char in enumerate(text):
        if char not in '[{':
            continue
        if attempts >= MAX_DECODE_ATTEMPTS:
            break
        attempts += 1
        try:
            value, _ = _decoder.raw_decode(text, index)
        except (ValueError, RecursionError):
            continue
        return value
    return None


def fallback_item(raw_text: str, kind: ContentKind) -> dict:
    """Wraps raw provider text verbatim with a neutral severity."""
    return {
        'title': FALLBACK_TITLES[kind],
        'description': raw_text,
        'severity': 'medium',
    }


def parse_provider_text(raw_text: str, kind: ContentKind) -> List[dict]:
    """
    Items from the provider text.

    An array gives one item per element, an object gives one item.
    Scalar elements are wrapped as {'description': value}. No usable
    segment gives exactly one fallback item.
    """
    segment = extract_json_segment(raw_text)

    if isinstance(segment, dict):
        items = [segment] if segment else []
    elif isinstance(segment, list):
        items = [
            element if isinstance(element, dict) else {'description': element}
            for element in segment
            if element is not None
        ]
    else:
        items = []

    if not items:
        logger.warning('Provider text had no usable JSON (%s), using fallback item', kind.value)
        return [fallback_item(raw_text, kind)]
    return items


@dataclass
class ContentResult:
    source: str
    city: str
    kind: ContentKind
    items: List[dict] = field(default_factory=list)

    def to_dict(self):
        return {
            'source': self.source,
            'city': self.city,
            'kind': self.kind.value,
            'items': self.items,
        }


class ContentCacheService:
    """
    Args:
        provider: object with generate(city, kind) -> str. Defaults to
                  the Gemini provider built from app config.
        clock: callable returning naive UTC now.
    """

    def __init__(self, provider=None, clock: Callable[[], datetime] = None):
        self._provider = provider
        self._clock = clock or datetime.utcnow

    @property
    def provider(self):
        if self._provider is not None:
            return self._provider
        return get_content_provider()

    @property
    def validity_window(self) -> timedelta:
        return timedelta(hours=current_app.config.get('CONTENT_CACHE_TTL_HOURS', 24))

    @property
    def max_items(self) -> int:
        return current_app.config.get('CONTENT_CACHE_MAX_ITEMS', 5)

    def fresh_entries(self, city: str, kind: ContentKind) -> List[CachedContent]:
        """Newest rows still inside the validity window, at most max_items."""
        cutoff = self._clock() - self.validity_window
        return CachedContent.query.filter(
            CachedContent.city == city,
            CachedContent.kind == kind,
            CachedContent.created_at > cutoff
        ).order_by(
            CachedContent.created_at.desc(), CachedContent.id.desc()
        ).limit(self.max_items).all()

    def get(self, city: str, kind=ContentKind.NEWS) -> ContentResult:
        """
        Cached content for a city, refilled from the provider when stale.

        Raises:
            ValidationError: blank or over-long city, unknown kind
            UpstreamUnavailable: cache stale/empty and the provider failed
        """
        city = require_city(city)
        kind = parse_enum(ContentKind, kind, 'kind')

        cached = self.fresh_entries(city, kind)
        if cached:
            logger.info('Content cache hit %s/%s (%d items)', city, kind.value, len(cached))
            return ContentResult(
                source=SOURCE_CACHE,
                city=city,
                kind=kind,
                items=[entry.to_dict() for entry in cached],
            )

        logger.info('Content cache miss %s/%s, calling provider', city, kind.value)
        raw_text = self.provider.generate(city, kind)
        items = parse_provider_text(raw_text, kind)

        now = self._clock()
        entries = [
            CachedContent(city=city, kind=kind, content=json.dumps(item), created_at=now)
            for item in items
        ]
        with atomic():
            db.session.add_all(entries)

        logger.info('Content cache refilled %s/%s with %d items', city, kind.value, len(entries))
        return ContentResult(
            source=SOURCE_PROVIDER,
            city=city,
            kind=kind,
            items=[entry.to_dict() for entry in entries],
        )

    def purge(self, older_than: timedelta) -> int:
        """Deletes rows older than `older_than`. Housekeeping only."""
        cutoff = self._clock() - older_than
        with atomic():
            deleted = CachedContent.query.filter(
                CachedContent.created_at < cutoff
            ).delete(synchronize_session=False)
        logger.info('Purged %d cached content rows older than %s', deleted, cutoff.isoformat())
        return deleted


# Singleton
content_cache_service = ContentCacheService()
