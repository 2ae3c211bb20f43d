"""
Admin moderation, user management, analytics and audit log tests
"""
from conftest import PASSWORD


class TestEventModeration:

    def test_pending_then_approve(self, client, admin, make_organizer, create_event):
        organizer = make_organizer()
        event = create_event(organizer['headers'], title='Drama Fest')

        pending = client.get('/api/admin/events/pending', headers=admin['headers']).json()
        assert [e['id'] for e in pending] == [event['id']]

        response = client.put(f"/api/admin/events/{event['id']}/approve", headers=admin['headers'])
        assert response.status_code == 200
        assert response.json()['status'] == 'approved'
        assert client.get('/api/admin/events/pending', headers=admin['headers']).json() == []

        titles = [n['title'] for n in client.get('/api/notifications', headers=organizer['headers']).json()['notifications']]
        assert 'Event Approved' in titles

    def test_reject_with_reason(self, client, admin, make_organizer, create_event):
        organizer = make_organizer()
        event = create_event(organizer['headers'])

        response = client.put(
            f"/api/admin/events/{event['id']}/reject",
            headers=admin['headers'],
            json={'reason': 'Venue unavailable'},
        )
        assert response.status_code == 200
        assert response.json()['status'] == 'rejected'
        assert response.json()['rejection_reason'] == 'Venue unavailable'

        notification = client.get('/api/notifications', headers=organizer['headers']).json()['notifications'][0]
        assert notification['title'] == 'Event Rejected'
        assert 'Venue unavailable' in notification['message']
        assert notification['priority'] == 'high'

    def test_reject_reason_too_long(self, client, admin, make_organizer, create_event):
        event = create_event(make_organizer()['headers'])

        response = client.put(
            f"/api/admin/events/{event['id']}/reject",
            headers=admin['headers'],
            json={'reason': 'x' * 1001},
        )
        assert response.status_code == 400
        assert response.json()['error'] == 'Invalid request data'
        assert client.get('/api/admin/events/pending', headers=admin['headers']).json()[0]['id'] == event['id']

    def test_all_events_listing(self, client, admin, make_organizer, create_event):
        create_event(admin['headers'])
        create_event(make_organizer()['headers'])

        everything = client.get('/api/admin/events', headers=admin['headers']).json()
        assert everything['pagination']['total'] == 2
        pending = client.get('/api/admin/events?status=pending', headers=admin['headers']).json()
        assert pending['pagination']['total'] == 1

    def test_organizer_cannot_moderate(self, client, make_organizer, create_event):
        organizer = make_organizer()
        event = create_event(organizer['headers'])
        response = client.put(f"/api/admin/events/{event['id']}/approve", headers=organizer['headers'])
        assert response.status_code == 403


class TestUserManagement:

    def test_approve_organizer(self, client, admin):
        client.post('/api/auth/register', json={
            'name': 'Prof. Iyer', 'email': 'iyer@college.edu', 'password': PASSWORD,
            'role': 'organizer', 'department': 'Mathematics', 'institutional_id': 'FAC777',
        })
        client.cookies.clear()

        pending = client.get('/api/admin/users?status=pending', headers=admin['headers']).json()
        assert [u['email'] for u in pending['users']] == ['iyer@college.edu']
        user_id = pending['users'][0]['id']

        response = client.put(f'/api/admin/users/{user_id}', headers=admin['headers'], json={'is_approved': True})
        assert response.status_code == 200
        assert response.json()['is_approved'] is True

        login = client.post('/api/auth/login', json={'email': 'iyer@college.edu', 'password': PASSWORD})
        assert login.status_code == 200

    def test_list_filters(self, client, admin, make_participant, make_organizer):
        make_participant(name='Zara Khan')
        make_organizer()

        participants = client.get('/api/admin/users?role=participant', headers=admin['headers']).json()
        assert participants['pagination']['total'] == 1
        found = client.get('/api/admin/users?search=zara', headers=admin['headers']).json()
        assert [u['name'] for u in found['users']] == ['Zara Khan']
        assert 'password_hash' not in found['users'][0]

    def test_search_underscore_is_literal(self, client, admin, make_participant):
        make_participant(name='priya_das')
        make_participant(name='Priya Das')

        found = client.get('/api/admin/users', params={'search': '_'}, headers=admin['headers']).json()
        assert [u['name'] for u in found['users']] == ['priya_das']

    def test_cannot_deactivate_self(self, client, admin):
        user_id = admin['user']['id']
        response = client.put(f'/api/admin/users/{user_id}', headers=admin['headers'], json={'is_active': False})
        assert response.status_code == 400
        assert response.json() == {'error': 'Cannot deactivate your own account'}

        response = client.delete(f'/api/admin/users/{user_id}', headers=admin['headers'])
        assert response.status_code == 400
        assert response.json() == {'error': 'Cannot delete your own account'}

    def test_delete_deactivates(self, client, admin, make_participant):
        participant = make_participant()
        response = client.delete(f"/api/admin/users/{participant['user']['id']}", headers=admin['headers'])
        assert response.status_code == 200

        inactive = client.get('/api/admin/users?status=inactive', headers=admin['headers']).json()
        assert [u['id'] for u in inactive['users']] == [participant['user']['id']]

    def test_participant_cannot_list_users(self, client, make_participant):
        assert client.get('/api/admin/users', headers=make_participant()['headers']).status_code == 403


class TestAnalyticsAndLogs:

    def test_analytics_overview(self, client, admin, make_participant, create_event):
        event = create_event(admin['headers'], category='cultural')
        participant = make_participant()
        client.post(f"/api/events/{event['id']}/register", headers=participant['headers'])

        response = client.get('/api/admin/analytics', headers=admin['headers'])
        assert response.status_code == 200
        body = response.json()
        assert body['users']['total'] == 2
        assert body['events']['approved'] == 1
        assert body['registrations']['total'] == 1
        assert body['category_distribution'] == [{'category': 'cultural', 'count': 1}]

    def test_activity_log_records_moderation(self, client, admin, make_organizer, create_event):
        event = create_event(make_organizer()['headers'])
        client.put(f"/api/admin/events/{event['id']}/approve", headers=admin['headers'])

        response = client.get('/api/admin/activity-logs?action=approve_event', headers=admin['headers'])
        assert response.status_code == 200
        body = response.json()
        assert body['total'] == 1
        assert body['logs'][0]['resource_id'] == event['id']
        assert body['logs'][0]['actor_id'] == admin['user']['id']
        assert body['has_more'] is False
