"""
Notification tests
"""
from datetime import datetime, timedelta, timezone

IST = timezone(timedelta(hours=5, minutes=30))


def test_personal_notification_read_flow(client, make_organizer, make_participant):
    organizer = make_organizer()
    participant = make_participant()

    created = client.post('/api/notifications', headers=organizer['headers'], json={
        'title': 'Room change', 'message': 'Moved to Hall B', 'user_id': participant['user']['id'],
    })
    assert created.status_code == 201
    notification_id = created.json()['id']

    inbox = client.get('/api/notifications', headers=participant['headers']).json()
    assert inbox['unread_count'] == 1

    read = client.put(f'/api/notifications/{notification_id}/read', headers=participant['headers'])
    assert read.status_code == 200
    assert read.json()['is_read'] is True
    assert client.get('/api/notifications?unread_only=true', headers=participant['headers']).json()['notifications'] == []


def test_cannot_read_someone_elses(client, make_organizer, make_participant):
    organizer = make_organizer()
    recipient, snooper = make_participant(), make_participant()
    created = client.post('/api/notifications', headers=organizer['headers'], json={
        'title': 'Hi', 'message': 'Private', 'user_id': recipient['user']['id'],
    }).json()

    response = client.put(f"/api/notifications/{created['id']}/read", headers=snooper['headers'])
    assert response.status_code == 403


def test_role_wide_notification(client, make_organizer, make_participant):
    organizer = make_organizer()
    participant = make_participant()
    client.post('/api/notifications', headers=organizer['headers'], json={
        'title': 'Exams', 'message': 'No events next week', 'target_role': 'participant',
    })

    titles = [n['title'] for n in client.get('/api/notifications', headers=participant['headers']).json()['notifications']]
    assert titles == ['Exams']
    assert client.get('/api/notifications', headers=organizer['headers']).json()['notifications'] == []


def test_target_required(client, make_organizer):
    response = client.post('/api/notifications', headers=make_organizer()['headers'], json={
        'title': 'Nobody', 'message': 'Lost',
    })
    assert response.status_code == 400
    assert response.json() == {'error': 'Either user_id or target_role is required'}


def test_participant_cannot_send(client, make_participant):
    participant = make_participant()
    response = client.post('/api/notifications', headers=participant['headers'], json={
        'title': 'Spam', 'message': 'Spam', 'target_role': 'participant',
    })
    assert response.status_code == 403


def test_mark_all_read(client, make_organizer, make_participant):
    organizer = make_organizer()
    participant = make_participant()
    for title in ('One', 'Two'):
        client.post('/api/notifications', headers=organizer['headers'], json={
            'title': title, 'message': 'x', 'user_id': participant['user']['id'],
        })

    client.put('/api/notifications/read-all', headers=participant['headers'])
    assert client.get('/api/notifications', headers=participant['headers']).json()['unread_count'] == 0


def test_broadcast_to_participants(client, make_organizer, make_participant):
    organizer = make_organizer()
    make_participant()
    make_participant()

    response = client.post('/api/organizer/notifications', headers=organizer['headers'], json={
        'title': 'Fest', 'message': 'Annual fest registrations open', 'target_users': 'participants',
    })
    assert response.status_code == 201
    assert response.json()['recipients'] == 2

    sent = client.get('/api/organizer/notifications', headers=organizer['headers']).json()
    assert len(sent) == 2


def test_event_announcement(client, admin, make_participant, create_event):
    event = create_event(admin['headers'])
    participant = make_participant()
    client.post(f"/api/events/{event['id']}/register", headers=participant['headers'])

    response = client.post(f"/api/organizer/events/{event['id']}/announcement", headers=admin['headers'], json={
        'title': 'Bring laptops', 'message': 'Charged, please', 'priority': 'high',
    })
    assert response.status_code == 201
    assert response.json()['recipients'] == 1

    titles = [n['title'] for n in client.get('/api/notifications', headers=participant['headers']).json()['notifications']]
    assert 'Bring laptops' in titles


def test_announcement_without_participants(client, admin, create_event):
    event = create_event(admin['headers'])
    response = client.post(f"/api/organizer/events/{event['id']}/announcement", headers=admin['headers'], json={
        'title': 'Anyone?', 'message': 'Hello',
    })
    assert response.status_code == 400


def test_role_wide_read_state_is_per_user(client, make_organizer, make_participant):
    organizer = make_organizer()
    reader, other = make_participant(), make_participant()
    created = client.post('/api/notifications', headers=organizer['headers'], json={
        'title': 'Library hours', 'message': 'Open till 10 pm', 'target_role': 'participant',
    }).json()

    response = client.put(f"/api/notifications/{created['id']}/read", headers=reader['headers'])
    assert response.status_code == 200
    assert response.json()['is_read'] is True

    mine = client.get('/api/notifications', headers=reader['headers']).json()
    assert mine['unread_count'] == 0
    assert mine['notifications'][0]['is_read'] is True

    theirs = client.get('/api/notifications', headers=other['headers']).json()
    assert theirs['unread_count'] == 1
    assert theirs['notifications'][0]['is_read'] is False


def test_read_all_covers_role_wide(client, make_organizer, make_participant):
    organizer = make_organizer()
    participant = make_participant()
    client.post('/api/notifications', headers=organizer['headers'], json={
        'title': 'Exams', 'message': 'No events next week', 'target_role': 'participant',
    })
    client.post('/api/notifications', headers=organizer['headers'], json={
        'title': 'Seat confirmed', 'message': 'Row C', 'user_id': participant['user']['id'],
    })

    client.put('/api/notifications/read-all', headers=participant['headers'])
    inbox = client.get('/api/notifications?unread_only=true', headers=participant['headers']).json()
    assert inbox['unread_count'] == 0
    assert inbox['notifications'] == []


def test_other_role_cannot_read_role_wide(client, make_organizer):
    sender, other_organizer = make_organizer(), make_organizer()
    created = client.post('/api/notifications', headers=sender['headers'], json={
        'title': 'Exams', 'message': 'No events next week', 'target_role': 'participant',
    }).json()

    response = client.put(f"/api/notifications/{created['id']}/read", headers=other_organizer['headers'])
    assert response.status_code == 403
    assert response.json() == {'error': 'Not your notification'}


def test_expiry_honours_client_offset(client, make_organizer, make_participant):
    organizer = make_organizer()
    participant = make_participant()
    now_ist = datetime.now(IST)
    for title, expires in (('Old', now_ist - timedelta(hours=1)), ('Fresh', now_ist + timedelta(hours=1))):
        response = client.post('/api/notifications', headers=organizer['headers'], json={
            'title': title, 'message': 'x', 'user_id': participant['user']['id'],
            'expires_at': expires.isoformat(),
        })
        assert response.status_code == 201

    titles = [n['title'] for n in client.get('/api/notifications', headers=participant['headers']).json()['notifications']]
    assert titles == ['Fresh']
