"""
Reports API - submit and browse reports, like and comment on them.
"""

from flask import Blueprint, request, g, current_app

from ..services.report_service import report_service, page_bounds
from ..services.engagement_service import engagement_service
from .middleware.auth import jwt_required, admin_required
from .schemas import parse_body
from .schemas.report import ReportCreate, CommentCreate, StatusUpdate

bp = Blueprint('reports', __name__, url_prefix='/reports')


@bp.route('', methods=['POST'])
@jwt_required
def create_report():
    """
    Submit a report. Location comes from the caller's profile.

    Body: title, description, category (or waste_type), severity,
    image_url, latitude, longitude
    """
    data = parse_body(ReportCreate)
    report = report_service.create_report(
        owner_id=g.current_user_id,
        title=data.title,
        description=data.description,
        category=data.category,
        severity=data.severity,
        image_url=data.image_url,
        latitude=data.latitude,
        longitude=data.longitude,
    )
    return {
        'success': True,
        'message': 'Report posted successfully',
        'report_id': report.id,
        'report': report.to_dict(),
    }, 201


@bp.route('/city/<city>', methods=['GET'])
def list_reports(city):
    """Reports for a city, newest first. Query: limit, offset."""
    limit, offset = page_bounds(
        request.args.get('limit', current_app.config['DEFAULT_PAGE_SIZE'], type=int),
        request.args.get('offset', 0, type=int),
    )

    reports, total = report_service.list_by_city(city, limit=limit, offset=offset)
    return {
        'success': True,
        'reports': reports,
        'total': total,
        'limit': limit,
        'offset': offset,
    }, 200


@bp.route('/<int:report_id>', methods=['GET'])
def get_report(report_id):
    report = report_service.get(report_id)
    return {
        'success': True,
        'report': report.to_dict(
            like_count=engagement_service.like_count(report_id),
            comment_count=report.comments.count(),
            author_name=report.author.name if report.author else None,
        ),
    }, 200


@bp.route('/<int:report_id>/status', methods=['PATCH'])
@jwt_required
@admin_required
def update_status(report_id):
    data = parse_body(StatusUpdate)
    report = report_service.update_status(report_id, data.status)
    return {'success': True, 'report': report.to_dict()}, 200


@bp.route('/<int:report_id>/like', methods=['POST'])
@jwt_required
def toggle_like(report_id):
    """Likes the report, or removes the like if it already exists."""
    result = engagement_service.toggle_like(report_id, g.current_user_id)
    return {
        'success': True,
        'liked': result['liked'],
        'action': 'liked' if result['liked'] else 'unliked',
        'likes': engagement_service.like_count(report_id),
    }, 200


@bp.route('/<int:report_id>/comments', methods=['GET'])
def list_comments(report_id):
    comments = engagement_service.comments_for(report_id)
    return {
        'success': True,
        'comments': [c.to_dict() for c in comments],
    }, 200


@bp.route('/<int:report_id>/comments', methods=['POST'])
@jwt_required
def add_comment(report_id):
    data = parse_body(CommentCreate)
    comment = engagement_service.add_comment(report_id, g.current_user_id, data.text)
    return {
        'success': True,
        'comment_id': comment.id,
        'comment': comment.to_dict(),
    }, 201
