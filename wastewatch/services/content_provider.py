"""
Content Provider - Gemini generateContent client.

Asks the model for city-specific waste/pollution content and returns
the raw response text. The text has no guaranteed schema; parsing is
the cache's job. Any transport-level failure is reported as
UpstreamUnavailable. Single attempt, no retries.
"""

import logging
from typing import Optional

import requests
from flask import current_app

from ..models import ContentKind
from .errors import UpstreamUnavailable

logger = logging.getLogger(__name__)


NEWS_PROMPT = (
    'Provide 5 important news headlines about waste management, pollution, and '
    'environmental issues specifically related to {city}, {region}. Format as JSON '
    'array with fields: title, description, severity (high/medium/low). Focus on '
    'actionable information about non-biodegradable waste, pollution control '
    'initiatives, and community efforts. Keep descriptions under 100 words each.'
)

POLLUTION_PROMPT = (
    'Provide detailed information about pollution and waste management issues in '
    '{city}, {region}. Include:\n'
    '1. Current pollution types (air, water, soil, plastic waste)\n'
    '2. Major pollution sources\n'
    '3. Health impacts\n'
    '4. Government initiatives\n'
    '5. How citizens can help\n'
    '6. Local waste management facilities\n'
    'Format as JSON with these keys: pollutionTypes, sources, healthImpacts, '
    'initiatives, citizenActions, facilities'
)

PROMPTS = {
    ContentKind.NEWS: NEWS_PROMPT,
    ContentKind.POLLUTION: POLLUTION_PROMPT,
}


class GeminiContentProvider:
    """Client for the Gemini REST API."""

    API_BASE = 'https://generativelanguage.googleapis.com/v1beta'

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
        region: Optional[str] = None,
        session: Optional[requests.Session] = None
    ):
        self.api_key = api_key
        self.model = model or 'gemini-1.5-flash'
        self.timeout = timeout or 20
        self.region = region or 'India'
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, config) -> 'GeminiContentProvider':
        return cls(
            api_key=config.get('GEMINI_API_KEY'),
            model=config.get('GEMINI_MODEL'),
            timeout=config.get('CONTENT_PROVIDER_TIMEOUT'),
            region=config.get('CONTENT_REGION'),
        )

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def build_prompt(self, city: str, kind: ContentKind) -> str:
        return PROMPTS[kind].format(city=city, region=self.region)

    def generate(self, city: str, kind: ContentKind = ContentKind.NEWS) -> str:
        """
        Returns the model's raw text for (city, kind).

        Raises:
            UpstreamUnavailable: not configured, timeout, transport error,
                                 non-2xx (incl. 429) or unreadable envelope
        """
        if not self.is_configured:
            logger.warning('GEMINI_API_KEY not configured')
            raise UpstreamUnavailable('Content provider is not configured')

        url = f'{self.API_BASE}/models/{self.model}:generateContent'
        body = {
            'contents': [
                {'parts': [{'text': self.build_prompt(city, kind)}]}
            ]
        }

        try:
            response = self.session.post(
                url,
                params={'key': self.api_key},
                json=body,
                timeout=self.timeout,
            )
        except requests.Timeout:
            logger.warning('Gemini request timed out after %ss (%s/%s)', self.timeout, city, kind.value)
            raise UpstreamUnavailable('Content provider timed out')
        except requests.RequestException as e:
            logger.warning('Gemini request failed (%s/%s): %s', city, kind.value, e)
            raise UpstreamUnavailable()

        if response.status_code == 429:
            logger.warning('Gemini rate limited (%s/%s)', city, kind.value)
            raise UpstreamUnavailable('Content provider rate limit reached')
        if response.status_code != 200:
            logger.warning('Gemini returned %s: %s', response.status_code, response.text[:200])
            raise UpstreamUnavailable()

        try:
            data = response.json()
            parts = data['candidates'][0]['content']['parts']
            return ''.join(part.get('text', '') for part in parts)
        except (ValueError, KeyError, IndexError, TypeError):
            logger.warning('Gemini response envelope could not be read (%s/%s)', city, kind.value)
            raise UpstreamUnavailable('Content provider returned an unreadable response')


def get_content_provider() -> GeminiContentProvider:
    """Provider built from the current app config."""
    return GeminiContentProvider.from_config(current_app.config)
