"""
Event registration and cancellation tests
"""
from conftest import in_hours


def register(client, event, participant):
    return client.post(f"/api/events/{event['id']}/register", headers=participant['headers'])


class TestRegister:

    def test_register_counts_participant(self, client, admin, make_participant, create_event):
        event = create_event(admin['headers'])
        participant = make_participant()

        response = register(client, event, participant)
        assert response.status_code == 201
        registration = response.json()['registration']
        assert registration['status'] == 'registered'
        assert registration['user_id'] == participant['user']['id']
        assert registration['user_department'] == 'Computer Science'

        assert client.get(f"/api/events/{event['id']}").json()['current_participants'] == 1

    def test_confirmation_notification(self, client, admin, make_participant, create_event):
        event = create_event(admin['headers'], title='Poetry Night')
        participant = make_participant()
        register(client, event, participant)

        notifications = client.get('/api/notifications', headers=participant['headers']).json()
        assert notifications['unread_count'] == 1
        assert notifications['notifications'][0]['title'] == 'Registration Confirmed'
        assert 'Poetry Night' in notifications['notifications'][0]['message']

    def test_double_registration(self, client, admin, make_participant, create_event):
        event = create_event(admin['headers'])
        participant = make_participant()
        register(client, event, participant)

        response = register(client, event, participant)
        assert response.status_code == 400
        assert response.json() == {'error': 'Already registered for this event'}

    def test_event_full(self, client, admin, make_participant, create_event):
        event = create_event(admin['headers'], max_participants=1)
        assert register(client, event, make_participant()).status_code == 201

        response = register(client, event, make_participant())
        assert response.status_code == 400
        assert response.json() == {'error': 'Event is full'}

    def test_deadline_passed(self, client, admin, make_participant, create_event):
        event = create_event(admin['headers'], registration_deadline=in_hours(-1))

        response = register(client, event, make_participant())
        assert response.status_code == 400
        assert response.json() == {'error': 'Registration deadline has passed'}
        assert client.get(f"/api/events/{event['id']}").json()['current_participants'] == 0

    def test_pending_event_not_open(self, client, make_organizer, make_participant, create_event):
        event = create_event(make_organizer()['headers'])
        response = register(client, event, make_participant())
        assert response.status_code == 404

    def test_only_participants_register(self, client, admin, make_organizer, create_event):
        event = create_event(admin['headers'])
        response = register(client, event, make_organizer())
        assert response.status_code == 403


class TestCancel:

    def test_cancel_then_register_again(self, client, admin, make_participant, create_event):
        event = create_event(admin['headers'], hours_from_now=24 * 5)
        participant = make_participant()
        register(client, event, participant)

        response = client.delete(f"/api/events/{event['id']}/register", headers=participant['headers'])
        assert response.status_code == 200
        assert client.get(f"/api/events/{event['id']}").json()['current_participants'] == 0

        again = register(client, event, participant)
        assert again.status_code == 201
        assert again.json()['registration']['status'] == 'registered'
        assert client.get(f"/api/events/{event['id']}").json()['current_participants'] == 1

    def test_cancel_too_close_to_event(self, client, admin, make_participant, create_event):
        event = create_event(admin['headers'], hours_from_now=5)
        participant = make_participant()
        register(client, event, participant)

        response = client.delete(f"/api/events/{event['id']}/register", headers=participant['headers'])
        assert response.status_code == 400
        assert response.json() == {'error': 'Cannot cancel registration less than 24 hours before the event'}

    def test_cancel_without_registration(self, client, admin, make_participant, create_event):
        event = create_event(admin['headers'])
        response = client.delete(f"/api/events/{event['id']}/register", headers=make_participant()['headers'])
        assert response.status_code == 400
        assert response.json() == {'error': 'Not registered for this event'}
