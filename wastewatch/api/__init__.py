"""
API Blueprint - JSON endpoints mounted under /api.

Sub-blueprints:
- /api/auth/*        signup, login, profile
- /api/reports/*     reports, likes, comments
- /api/stats, /api/leaderboard
- /api/news, /api/pollution
"""

from flask import Blueprint

bp = Blueprint('api', __name__)

_routes_registered = False


def register_routes():
    """
    Registers every sub-blueprint on the api blueprint.
    Called from the app factory; safe to call once per app.
    """
    global _routes_registered
    if _routes_registered:
        return
    _routes_registered = True

    from . import auth, reports, stats, content

    bp.register_blueprint(auth.bp)
    bp.register_blueprint(reports.bp)
    bp.register_blueprint(stats.bp)
    bp.register_blueprint(content.bp)
