"""
Stats API - city statistics and leaderboard.
"""

from flask import Blueprint, request, current_app

from ..services.analytics_service import analytics_service

bp = Blueprint('stats', __name__)


@bp.route('/stats/<city>', methods=['GET'])
def city_stats(city):
    return {
        'success': True,
        'stats': analytics_service.city_stats(city),
    }, 200


@bp.route('/leaderboard/<city>', methods=['GET'])
def leaderboard(city):
    """Top contributors of a city. Query: limit (default 10)."""
    limit = request.args.get('limit', current_app.config['LEADERBOARD_SIZE'], type=int)
    return {
        'success': True,
        'leaderboard': analytics_service.leaderboard(city, top_n=limit),
    }, 200
