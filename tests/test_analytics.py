"""
Analytics tests: city statistics and leaderboard ordering.
"""
import pytest

from wastewatch.services.errors import ValidationError
from wastewatch.services.analytics_service import analytics_service
from wastewatch.services.auth_service import auth_service
from wastewatch.services.engagement_service import engagement_service


class TestCityStats:

    def test_single_high_plastic_report(self, db, resident, make_report):
        make_report(resident, category='plastic', severity='high')

        stats = analytics_service.city_stats('Pune')

        assert stats['city'] == 'Pune'
        assert stats['total_reports'] == 1
        assert stats['per_category_counts']['plastic'] == 1
        assert stats['high_severity_count'] == 1

    def test_counts_are_zero_filled(self, db):
        stats = analytics_service.city_stats('Atlantis')
        assert stats['total_reports'] == 0
        assert stats['active_users'] == 0
        assert stats['high_severity_count'] == 0
        assert set(stats['per_category_counts']) == {
            'plastic', 'electronic', 'industrial', 'organic', 'hazardous', 'medical', 'other'
        }
        assert all(v == 0 for v in stats['per_category_counts'].values())
        assert stats['per_status_counts']['open'] == 0

    def test_mixed_reports(self, db, resident, neighbour, outsider, make_report):
        make_report(resident, category='plastic', severity='high')
        make_report(resident, category='organic', severity='low')
        make_report(neighbour, category='plastic', severity='critical')
        make_report(outsider, category='plastic', severity='high')

        stats = analytics_service.city_stats('Pune')

        assert stats['total_reports'] == 3
        assert stats['active_users'] == 2
        assert stats['per_category_counts']['plastic'] == 2
        assert stats['per_category_counts']['organic'] == 1
        assert stats['per_severity_counts'] == {'low': 1, 'medium': 0, 'high': 1, 'critical': 1}
        # critical is tracked on its own
        assert stats['high_severity_count'] == 1
        assert stats['per_status_counts']['open'] == 3

    def test_stats_endpoint(self, client, resident, make_report):
        make_report(resident, severity='high')
        r = client.get('/api/stats/Pune')
        assert r.status_code == 200
        body = r.get_json()
        assert body['success'] is True
        assert body['stats']['total_reports'] == 1
        assert body['stats']['high_severity_count'] == 1

    def test_over_long_city(self, db):
        with pytest.raises(ValidationError):
            analytics_service.city_stats('X' * 51)

    def test_stats_endpoint_blank_city(self, client):
        r = client.get('/api/stats/%20%20')
        assert r.status_code == 400
        assert r.get_json()['field'] == 'city'


class TestLeaderboard:

    def test_ordered_by_contributions_then_likes(self, db, resident, neighbour, admin, make_report):
        # resident: 2 reports, 0 likes; neighbour: 2 reports, 1 like; admin: 1 report
        make_report(resident)
        make_report(resident)
        liked = make_report(neighbour)
        make_report(neighbour)
        make_report(admin)
        engagement_service.toggle_like(liked.id, resident.id)

        board = analytics_service.leaderboard('Pune')

        assert [row['user_id'] for row in board] == [neighbour.id, resident.id, admin.id]
        assert board[0] == {
            'user_id': neighbour.id,
            'name': 'Ravi Kulkarni',
            'contribution_count': 2,
            'total_likes_received': 1,
        }

    def test_exact_ties_ordered_by_user_id(self, db, resident, neighbour, make_report):
        make_report(neighbour)
        make_report(resident)
        board = analytics_service.leaderboard('Pune')
        assert [row['user_id'] for row in board] == sorted([resident.id, neighbour.id])

    def test_contributions_city_scoped_likes_global(self, db, resident, neighbour, outsider, make_report):
        """A user who moved keeps global likes but only counts local reports."""
        old_report = make_report(resident)
        engagement_service.toggle_like(old_report.id, neighbour.id)
        engagement_service.toggle_like(old_report.id, outsider.id)

        auth_service.update_profile(resident.id, city='Mumbai')
        make_report(resident)

        board = analytics_service.leaderboard('Mumbai')
        row = next(r for r in board if r['user_id'] == resident.id)

        assert row['contribution_count'] == 1
        assert row['total_likes_received'] == 2

    def test_members_are_city_residents(self, db, resident, outsider, make_report):
        make_report(resident)
        make_report(outsider)
        board = analytics_service.leaderboard('Pune')
        assert [row['user_id'] for row in board] == [resident.id]

    def test_residents_without_reports_listed_with_zero(self, db, resident, neighbour, make_report):
        make_report(resident)
        board = analytics_service.leaderboard('Pune')
        assert board[-1] == {
            'user_id': neighbour.id,
            'name': 'Ravi Kulkarni',
            'contribution_count': 0,
            'total_likes_received': 0,
        }

    def test_top_n(self, db, resident, neighbour, admin, make_report):
        make_report(resident)
        assert len(analytics_service.leaderboard('Pune', top_n=2)) == 2
        assert analytics_service.leaderboard('Pune', top_n=0) == []

    def test_leaderboard_endpoint(self, client, resident, neighbour, make_report):
        make_report(neighbour)
        r = client.get('/api/leaderboard/Pune?limit=1')
        assert r.status_code == 200
        board = r.get_json()['leaderboard']
        assert len(board) == 1
        assert board[0]['user_id'] == neighbour.id

    def test_leaderboard_over_long_city(self, client):
        r = client.get('/api/leaderboard/' + 'X' * 51)
        assert r.status_code == 400
        assert r.get_json()['error'] == 'validation_error'
