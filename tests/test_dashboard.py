"""
Participant and organizer dashboard tests
"""


def test_participant_stats(client, admin, make_participant, create_event):
    participant = make_participant()
    upcoming = create_event(admin['headers'], title='Career Fair')
    cancelled = create_event(admin['headers'], title='Chess Open')
    client.post(f"/api/events/{upcoming['id']}/register", headers=participant['headers'])
    client.post(f"/api/events/{cancelled['id']}/register", headers=participant['headers'])
    client.delete(f"/api/events/{cancelled['id']}/register", headers=participant['headers'])

    stats = client.get('/api/dashboard/stats', headers=participant['headers']).json()
    assert stats == {
        'total_registrations': 1,
        'upcoming_events': 1,
        'certificates_earned': 0,
        'events_attended': 0,
    }

    events = client.get('/api/dashboard/events', headers=participant['headers']).json()
    assert [e['title'] for e in events] == ['Career Fair']


def test_participant_dashboard_is_participant_only(client, make_organizer):
    assert client.get('/api/dashboard/stats', headers=make_organizer()['headers']).status_code == 403


def test_organizer_stats(client, admin, make_organizer, make_participant, create_event):
    organizer = make_organizer()
    approved = create_event(organizer['headers'], title='Approved')
    create_event(organizer['headers'], title='Waiting')
    client.put(f"/api/admin/events/{approved['id']}/approve", headers=admin['headers'])

    participant = make_participant()
    client.post(f"/api/events/{approved['id']}/register", headers=participant['headers'])
    client.post('/api/feedback', headers=participant['headers'], json={'event_id': approved['id'], 'rating': 5})

    stats = client.get('/api/organizer/dashboard/stats', headers=organizer['headers']).json()
    assert stats['total_events'] == 2
    assert stats['upcoming_events'] == 2
    assert stats['pending_events'] == 1
    assert stats['total_registrations'] == 1
    assert stats['average_rating'] == 5.0
    assert stats['certificates_issued'] == 0


def test_organizer_event_and_registration_lists(client, admin, make_organizer, make_participant, create_event):
    organizer = make_organizer()
    event = create_event(organizer['headers'], title='Hack Night')
    client.put(f"/api/admin/events/{event['id']}/approve", headers=admin['headers'])
    participant = make_participant()
    client.post(f"/api/events/{event['id']}/register", headers=participant['headers'])

    events = client.get('/api/organizer/events?type=upcoming', headers=organizer['headers']).json()
    assert [e['title'] for e in events] == ['Hack Night']
    assert client.get('/api/organizer/events?type=past', headers=organizer['headers']).json() == []

    registrations = client.get('/api/organizer/registrations', headers=organizer['headers']).json()
    assert len(registrations) == 1
    assert registrations[0]['event_title'] == 'Hack Night'
    assert registrations[0]['user_id'] == participant['user']['id']
