"""
Content API - news and pollution briefings per city.

Served from the content cache; the provider is only called when the
city's cache is empty or stale.
"""

from flask import Blueprint

from ..models import ContentKind
from ..services.content_cache_service import content_cache_service

bp = Blueprint('content', __name__)


@bp.route('/news/<city>', methods=['GET'])
def news(city):
    result = content_cache_service.get(city, ContentKind.NEWS)
    return {
        'success': True,
        'source': result.source,
        'city': result.city,
        'news': result.items,
    }, 200


@bp.route('/pollution/<city>', methods=['GET'])
def pollution(city):
    result = content_cache_service.get(city, ContentKind.POLLUTION)
    return {
        'success': True,
        'source': result.source,
        'city': result.city,
        'data': result.items,
    }, 200
