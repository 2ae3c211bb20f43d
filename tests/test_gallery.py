"""
Gallery and event media tests
"""
from conftest import png_bytes


def upload(client, headers, title='Annual Day', category='cultural', tags='stage, dance', image=None, content_type='image/png'):
    return client.post(
        '/api/admin/gallery',
        headers=headers,
        data={'title': title, 'category': category, 'tags': tags},
        files={'file': ('photo.png', image if image is not None else png_bytes(), content_type)},
    )


class TestAdminGallery:

    def test_upload_optimizes_and_orders(self, client, admin):
        first = upload(client, admin['headers'])
        assert first.status_code == 201
        item = first.json()
        assert item['tags'] == ['stage', 'dance']
        assert item['display_order'] == 0
        assert item['mime_type'] == 'image/jpeg'
        assert item['thumbnail_url'].endswith('_thumb.jpg')

        second = upload(client, admin['headers'], title='Encore').json()
        assert second['display_order'] == 1

    def test_invalid_category(self, client, admin):
        response = upload(client, admin['headers'], category='memes')
        assert response.status_code == 400
        assert response.json()['error'].startswith('Invalid category')

    def test_rejects_non_image(self, client, admin):
        response = upload(client, admin['headers'], image=b'%PDF-1.4', content_type='application/pdf')
        assert response.status_code == 400
        assert response.json() == {'error': 'Only image files are allowed'}

    def test_update_and_hide(self, client, admin):
        item = upload(client, admin['headers']).json()
        response = client.put(f"/api/admin/gallery/{item['id']}", headers=admin['headers'], json={
            'title': 'Annual Day 2026', 'is_active': False,
        })
        assert response.status_code == 200
        assert response.json()['title'] == 'Annual Day 2026'
        assert response.json()['is_active'] is False

        assert client.get('/api/gallery').json()['total'] == 0
        assert len(client.get('/api/admin/gallery', headers=admin['headers']).json()) == 1

    def test_delete(self, client, admin):
        item = upload(client, admin['headers']).json()
        assert client.delete(f"/api/admin/gallery/{item['id']}", headers=admin['headers']).status_code == 200
        assert client.get('/api/admin/gallery', headers=admin['headers']).json() == []
        assert client.delete(f"/api/admin/gallery/{item['id']}", headers=admin['headers']).status_code == 404

    def test_organizer_cannot_upload(self, client, make_organizer):
        assert upload(client, make_organizer()['headers']).status_code == 403


def test_public_gallery_counts(client, admin):
    upload(client, admin['headers'], category='sports', title='Finals')
    upload(client, admin['headers'], category='sports', title='Semis')
    upload(client, admin['headers'], category='technical', title='Demo day')

    body = client.get('/api/gallery').json()
    assert body['total'] == 3
    assert body['category_counts']['sports'] == 2
    assert body['category_counts']['academic'] == 0

    sports = client.get('/api/gallery?category=sports').json()
    assert [i['title'] for i in sports['items']] == ['Finals', 'Semis']


def test_event_media_upload(client, make_organizer, create_event):
    organizer = make_organizer()
    event = create_event(organizer['headers'])

    response = client.post(
        '/api/organizer/media',
        headers=organizer['headers'],
        data={'event_id': event['id'], 'caption': 'Setup'},
        files={'file': ('setup.png', png_bytes(), 'image/png')},
    )
    assert response.status_code == 201
    assert response.json()['event_id'] == event['id']

    listed = client.get('/api/organizer/media', headers=organizer['headers']).json()
    assert [m['caption'] for m in listed] == ['Setup']


def test_event_media_other_organizer(client, make_organizer, create_event):
    event = create_event(make_organizer()['headers'])
    response = client.post(
        '/api/organizer/media',
        headers=make_organizer()['headers'],
        data={'event_id': event['id']},
        files={'file': ('x.png', png_bytes(), 'image/png')},
    )
    assert response.status_code == 403
