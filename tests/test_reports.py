"""
Report tests: creation, validation, city listing and status changes.
"""
import pytest

from wastewatch.models import Report, ReportSeverity, ReportStatus, ReportCategory
from wastewatch.services.errors import ValidationError, NotFound
from wastewatch.services.report_service import report_service
from wastewatch.services.auth_service import auth_service
from wastewatch.services.engagement_service import engagement_service


class TestCreateReport:

    def test_location_copied_from_owner(self, db, resident, make_report):
        report = make_report(resident)
        assert report.id is not None
        assert report.city == 'Pune'
        assert report.state == 'Maharashtra'
        assert report.user_id == resident.id
        assert report.status == ReportStatus.OPEN

    def test_severity_defaults_to_medium(self, db, resident, make_report):
        report = make_report(resident)
        assert report.severity == ReportSeverity.MEDIUM

    def test_enum_values_case_insensitive(self, db, resident, make_report):
        report = make_report(resident, category='ELECTRONIC', severity='High')
        assert report.category == ReportCategory.ELECTRONIC
        assert report.severity == ReportSeverity.HIGH

    @pytest.mark.parametrize('field', ['title', 'description', 'category'])
    def test_missing_required_field(self, db, resident, make_report, field):
        with pytest.raises(ValidationError) as exc:
            make_report(resident, **{field: '  '})
        assert exc.value.field == field
        assert Report.query.count() == 0

    def test_unknown_category_lists_allowed_values(self, db, resident, make_report):
        with pytest.raises(ValidationError) as exc:
            make_report(resident, category='glitter')
        assert 'plastic' in exc.value.message

    def test_unknown_owner(self, db):
        with pytest.raises(NotFound):
            report_service.create_report(999, 'Title', 'Description', 'plastic')

    def test_city_frozen_after_owner_moves(self, db, resident, make_report):
        report = make_report(resident)
        auth_service.update_profile(resident.id, city='Nagpur')

        pune, pune_total = report_service.list_by_city('Pune')
        nagpur, nagpur_total = report_service.list_by_city('Nagpur')

        assert pune_total == 1
        assert pune[0]['id'] == report.id
        assert nagpur_total == 0
        assert nagpur == []


class TestListByCity:

    def test_newest_first_with_counts(self, db, resident, neighbour, make_report):
        older = make_report(resident, title='Older')
        newer = make_report(neighbour, title='Newer')
        engagement_service.toggle_like(older.id, neighbour.id)
        engagement_service.add_comment(older.id, neighbour.id, 'Seen it too')

        reports, total = report_service.list_by_city('Pune')

        assert total == 2
        assert [r['id'] for r in reports] == [newer.id, older.id]
        assert reports[1]['likes'] == 1
        assert reports[1]['comments'] == 1
        assert reports[1]['author_name'] == 'Asha Patil'
        assert reports[0]['likes'] == 0

    def test_other_city_not_listed(self, db, resident, outsider, make_report):
        make_report(resident)
        make_report(outsider)
        reports, total = report_service.list_by_city('Mumbai')
        assert total == 1
        assert reports[0]['city'] == 'Mumbai'

    def test_pagination(self, db, resident, make_report):
        ids = [make_report(resident, title=f'Report {i}').id for i in range(5)]

        page, total = report_service.list_by_city('Pune', limit=2, offset=2)

        assert total == 5
        assert [r['id'] for r in page] == list(reversed(ids))[2:4]

    def test_negative_paging_is_clamped(self, db, resident, make_report):
        make_report(resident)
        page, total = report_service.list_by_city('Pune', limit=-5, offset=-3)
        assert total == 1
        assert page == []

    def test_limit_capped(self, app, db, resident, make_report):
        make_report(resident)
        page, _ = report_service.list_by_city('Pune', limit=10_000)
        assert len(page) == 1

    def test_empty_city(self, db):
        assert report_service.list_by_city('Atlantis') == ([], 0)

    @pytest.mark.parametrize('city', ['', '  ', 'X' * 51])
    def test_invalid_city(self, db, city):
        with pytest.raises(ValidationError) as exc:
            report_service.list_by_city(city)
        assert exc.value.field == 'city'


class TestUpdateStatus:

    def test_status_change_keeps_location(self, db, resident, make_report):
        report = make_report(resident)
        updated = report_service.update_status(report.id, 'resolved')
        assert updated.status == ReportStatus.RESOLVED
        assert updated.city == 'Pune'
        assert updated.user_id == resident.id

    def test_unknown_status(self, db, resident, make_report):
        report = make_report(resident)
        with pytest.raises(ValidationError):
            report_service.update_status(report.id, 'archived')

    def test_unknown_report(self, db):
        with pytest.raises(NotFound):
            report_service.update_status(12345, 'resolved')


class TestReportEndpoints:

    def test_create_requires_token(self, client):
        r = client.post('/api/reports', json={'title': 'x'})
        assert r.status_code == 401
        assert r.get_json()['error'] == 'unauthorized'

    def test_create(self, client_resident, resident):
        r = client_resident.post('/api/reports', json={
            'title': 'Burning garbage',
            'description': 'Smoke every evening behind the market',
            'waste_type': 'hazardous',
            'severity': 'critical',
            'latitude': 18.52,
            'longitude': 73.85,
        })
        assert r.status_code == 201
        body = r.get_json()
        assert body['success'] is True
        assert body['report']['city'] == 'Pune'
        assert body['report']['category'] == 'hazardous'
        assert body['report']['severity'] == 'critical'
        assert body['report_id'] == body['report']['id']

    def test_create_missing_title(self, client_resident):
        r = client_resident.post('/api/reports', json={
            'description': 'No title given', 'category': 'plastic'
        })
        assert r.status_code == 400
        body = r.get_json()
        assert body['error'] == 'validation_error'
        assert body['field'] == 'title'

    def test_list_city(self, client, resident, make_report):
        make_report(resident)
        r = client.get('/api/reports/city/Pune?limit=5')
        assert r.status_code == 200
        body = r.get_json()
        assert body['total'] == 1
        assert body['limit'] == 5
        assert body['reports'][0]['author_name'] == 'Asha Patil'

    def test_list_echoes_clamped_paging(self, client, resident, make_report):
        make_report(resident)
        r = client.get('/api/reports/city/Pune?limit=5000&offset=-4')
        assert r.status_code == 200
        body = r.get_json()
        assert body['limit'] == 100
        assert body['offset'] == 0
        assert body['total'] == 1

    def test_list_over_long_city(self, client):
        r = client.get('/api/reports/city/' + 'X' * 51)
        assert r.status_code == 400
        assert r.get_json()['field'] == 'city'

    def test_get_report(self, client, resident, make_report):
        report = make_report(resident)
        r = client.get(f'/api/reports/{report.id}')
        assert r.status_code == 200
        body = r.get_json()['report']
        assert body['likes'] == 0
        assert body['comments'] == 0

    def test_get_unknown_report(self, client):
        r = client.get('/api/reports/999')
        assert r.status_code == 404
        assert r.get_json()['error'] == 'not_found'

    def test_status_admin_only(self, client_resident, resident, make_report):
        report = make_report(resident)
        r = client_resident.patch(f'/api/reports/{report.id}/status', json={'status': 'resolved'})
        assert r.status_code == 403
        assert r.get_json()['error'] == 'forbidden'

    def test_status_as_admin(self, client_admin, resident, make_report):
        report = make_report(resident)
        r = client_admin.patch(f'/api/reports/{report.id}/status', json={'status': 'in_progress'})
        assert r.status_code == 200
        assert r.get_json()['report']['status'] == 'in_progress'
