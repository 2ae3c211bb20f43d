"""
Event feedback tests
"""


def submit(client, participant, event, **overrides):
    payload = {'event_id': event['id'], 'rating': 4, 'comment': 'Well run'}
    payload.update(overrides)
    return client.post('/api/feedback', headers=participant['headers'], json=payload)


def test_submit_defaults_categories_to_rating(client, admin, make_participant, create_event):
    event = create_event(admin['headers'], title='Tech Talk')
    response = submit(client, make_participant(), event, categories={'venue': 2})

    assert response.status_code == 201
    body = response.json()
    assert body['categories'] == {'organization': 4, 'content': 4, 'venue': 2, 'overall': 4}
    assert body['event_title'] == 'Tech Talk'


def test_duplicate_feedback(client, admin, make_participant, create_event):
    event = create_event(admin['headers'])
    participant = make_participant()
    submit(client, participant, event)

    response = submit(client, participant, event, rating=1)
    assert response.status_code == 400
    assert response.json() == {'error': 'Feedback already submitted for this event'}


def test_rating_out_of_range(client, admin, make_participant, create_event):
    event = create_event(admin['headers'])
    response = submit(client, make_participant(), event, rating=6)
    assert response.status_code == 400


def test_anonymous_hides_author(client, admin, make_participant, create_event):
    event = create_event(admin['headers'])
    submit(client, make_participant(name='Secret Student'), event, is_anonymous=True)

    listed = client.get(f"/api/feedback?event_id={event['id']}", headers=admin['headers']).json()
    assert listed['total'] == 1
    assert listed['feedback'][0]['user_name'] == 'Anonymous'
    assert listed['feedback'][0]['user_id'] is None


def test_participants_see_only_their_own(client, admin, make_participant, create_event):
    event = create_event(admin['headers'])
    mine, theirs = make_participant(), make_participant()
    submit(client, mine, event)
    submit(client, theirs, event)

    assert client.get('/api/feedback', headers=mine['headers']).json()['total'] == 1
    assert client.get('/api/feedback', headers=admin['headers']).json()['total'] == 2


def test_summary(client, admin, make_participant, create_event):
    event = create_event(admin['headers'])
    submit(client, make_participant(), event, rating=5)
    submit(client, make_participant(), event, rating=2, categories={'content': 4})

    response = client.get(f"/api/feedback/summary?event_id={event['id']}", headers=admin['headers'])
    assert response.status_code == 200
    body = response.json()
    assert body['total'] == 2
    assert body['average_rating'] == 3.5
    assert body['rating_distribution'] == {'1': 0, '2': 1, '3': 0, '4': 0, '5': 1}
    assert body['category_averages']['content'] == 4.5
    assert body['category_averages']['venue'] == 3.5
