"""
Event listing, creation, moderation and QR code tests
"""
from conftest import in_hours


class TestCreateEvent:

    def test_organizer_event_starts_pending(self, client, make_organizer, create_event):
        organizer = make_organizer()
        event = create_event(organizer['headers'])

        assert event['status'] == 'pending'
        assert event['organizer_id'] == organizer['user']['id']
        assert event['current_participants'] == 0
        assert event['tags'] == ['robotics', 'hardware']
        assert event['registration_deadline'] == event['date']

    def test_admin_event_is_approved(self, admin, create_event):
        event = create_event(admin['headers'])
        assert event['status'] == 'approved'

    def test_participant_cannot_create(self, client, make_participant):
        participant = make_participant()
        response = client.post('/api/events', headers=participant['headers'], json={
            'title': 'x', 'description': 'x', 'category': 'other', 'venue': 'x',
            'date': in_hours(48), 'time': '10:00',
        })
        assert response.status_code == 403
        assert response.json() == {'error': 'Insufficient permissions'}

    def test_past_date_rejected(self, client, admin):
        response = client.post('/api/events', headers=admin['headers'], json={
            'title': 'Late', 'description': 'x', 'category': 'other', 'venue': 'Hall',
            'date': in_hours(-1), 'time': '10:00',
        })
        assert response.status_code == 400
        assert response.json()['error'] == 'Event date must be in the future'

    def test_deadline_after_event_rejected(self, client, admin):
        response = client.post('/api/events', headers=admin['headers'], json={
            'title': 'Talk', 'description': 'x', 'category': 'seminar', 'venue': 'Hall',
            'date': in_hours(48), 'registration_deadline': in_hours(72), 'time': '10:00',
        })
        assert response.status_code == 400
        assert response.json()['error'] == 'Registration deadline must be before event date'

    def test_missing_fields(self, client, admin):
        response = client.post('/api/events', headers=admin['headers'], json={'title': 'Only a title'})
        assert response.status_code == 400
        body = response.json()
        assert body['error'] == 'Invalid request data'
        assert {d['field'] for d in body['details']} >= {'description', 'venue', 'date'}


class TestListEvents:

    def test_public_list_shows_only_approved(self, client, admin, make_organizer, create_event):
        create_event(admin['headers'], title='Approved Talk')
        create_event(make_organizer()['headers'], title='Pending Talk')

        response = client.get('/api/events')
        assert response.status_code == 200
        body = response.json()
        assert [e['title'] for e in body['events']] == ['Approved Talk']
        assert body['pagination'] == {'page': 1, 'limit': 12, 'total': 1, 'pages': 1}

    def test_filters_and_search(self, client, admin, create_event):
        create_event(admin['headers'], title='Football Finals', category='sports')
        create_event(admin['headers'], title='Hackathon', category='competition', description='24 hour coding')

        assert [e['title'] for e in client.get('/api/events?category=sports').json()['events']] == ['Football Finals']
        assert [e['title'] for e in client.get('/api/events?search=coding').json()['events']] == ['Hackathon']

    def test_search_treats_wildcards_literally(self, client, admin, create_event):
        create_event(admin['headers'], title='100% Attendance Drive')
        create_event(admin['headers'], title='Quiz Night')

        percent = client.get('/api/events', params={'search': '%'}).json()['events']
        assert [e['title'] for e in percent] == ['100% Attendance Drive']
        assert client.get('/api/events', params={'search': '_'}).json()['events'] == []

    def test_sorting_and_pagination(self, client, admin, create_event):
        create_event(admin['headers'], hours_from_now=72, title='Later')
        create_event(admin['headers'], hours_from_now=48, title='Sooner')

        first_page = client.get('/api/events?limit=1&sort_by=date&sort_order=asc').json()
        assert first_page['events'][0]['title'] == 'Sooner'
        assert first_page['pagination']['pages'] == 2

        by_title = client.get('/api/events?sort_by=title&sort_order=desc').json()
        assert [e['title'] for e in by_title['events']] == ['Sooner', 'Later']

    def test_get_event_not_found(self, client):
        response = client.get('/api/events/00000000-0000-0000-0000-000000000000')
        assert response.status_code == 404
        assert response.json() == {'error': 'Event not found'}


class TestManageEvent:

    def test_owner_updates_event(self, client, make_organizer, create_event):
        organizer = make_organizer()
        event = create_event(organizer['headers'])

        response = client.put(f"/api/events/{event['id']}", headers=organizer['headers'], json={
            'venue': 'Main Auditorium', 'tags': ['ai'],
        })
        assert response.status_code == 200
        assert response.json()['venue'] == 'Main Auditorium'
        assert response.json()['tags'] == ['ai']
        assert response.json()['title'] == event['title']

    def test_other_organizer_forbidden(self, client, make_organizer, create_event):
        event = create_event(make_organizer()['headers'])
        intruder = make_organizer()

        response = client.put(f"/api/events/{event['id']}", headers=intruder['headers'], json={'venue': 'Roof'})
        assert response.status_code == 403
        assert client.delete(f"/api/events/{event['id']}", headers=intruder['headers']).status_code == 403

    def test_admin_can_update_any_event(self, client, admin, make_organizer, create_event):
        event = create_event(make_organizer()['headers'])
        response = client.put(f"/api/events/{event['id']}", headers=admin['headers'], json={'title': 'Renamed'})
        assert response.status_code == 200
        assert response.json()['title'] == 'Renamed'

    def test_soft_delete_hides_event(self, client, admin, create_event):
        event = create_event(admin['headers'])
        response = client.delete(f"/api/events/{event['id']}", headers=admin['headers'])
        assert response.status_code == 200

        assert client.get(f"/api/events/{event['id']}").status_code == 404
        assert client.get('/api/events').json()['pagination']['total'] == 0


class TestCheckinQRCode:

    def test_owner_gets_qr(self, client, make_organizer, create_event):
        organizer = make_organizer()
        event = create_event(organizer['headers'])

        response = client.get(f"/api/events/{event['id']}/qr-code", headers=organizer['headers'])
        assert response.status_code == 200
        body = response.json()
        assert body['qr_data'].startswith(f"event:{event['id']}:checkin:")
        assert body['qr_image']
        assert body['event']['id'] == event['id']

    def test_participant_cannot_get_qr(self, client, admin, make_participant, create_event):
        event = create_event(admin['headers'])
        response = client.get(f"/api/events/{event['id']}/qr-code", headers=make_participant()['headers'])
        assert response.status_code == 403
