"""
Authentication endpoint tests
"""
from conftest import PASSWORD


def register(client, **overrides):
    payload = {
        'name': 'Asha Rao',
        'email': 'asha@college.edu',
        'password': PASSWORD,
        'role': 'participant',
        'department': 'Physics',
        'enrollment_number': 'PHY001',
    }
    payload.update(overrides)
    return client.post('/api/auth/register', json=payload)


class TestRegister:

    def test_participant_gets_token_and_cookie(self, client):
        response = register(client)
        assert response.status_code == 201
        body = response.json()
        assert body['token']
        assert body['requires_approval'] is False
        assert body['user']['role'] == 'participant'
        assert 'password_hash' not in body['user']
        assert 'auth-token' in response.cookies

    def test_email_is_lowercased(self, client):
        response = register(client, email='Asha@College.edu')
        assert response.json()['user']['email'] == 'asha@college.edu'

    def test_organizer_waits_for_approval(self, client):
        response = register(
            client, email='prof@college.edu', role='organizer',
            enrollment_number=None, institutional_id='FAC100'
        )
        assert response.status_code == 201
        body = response.json()
        assert body['requires_approval'] is True
        assert body['token'] is None
        assert body['user']['is_approved'] is False

        login = client.post('/api/auth/login', json={'email': 'prof@college.edu', 'password': PASSWORD})
        assert login.status_code == 401
        assert login.json() == {'error': 'Account pending approval from administrator'}

    def test_participant_needs_enrollment_number(self, client):
        response = register(client, enrollment_number=None)
        assert response.status_code == 400
        assert 'enrollment number' in response.json()['error']

    def test_weak_password(self, client):
        response = register(client, password='weak')
        assert response.status_code == 400
        body = response.json()
        assert body['error'] == 'Password validation failed'
        assert len(body['details']) >= 2

    def test_duplicate_email(self, client):
        assert register(client).status_code == 201
        response = register(client, enrollment_number='PHY002')
        assert response.status_code == 409
        assert response.json()['error'] == 'User with this email already exists'

    def test_duplicate_enrollment_number(self, client):
        assert register(client).status_code == 201
        response = register(client, email='other@college.edu')
        assert response.status_code == 409

    def test_admin_role_cannot_self_register(self, client):
        response = register(client, role='admin')
        assert response.status_code == 400
        assert response.json()['error'] == 'Invalid request data'


class TestLogin:

    def test_login_and_me(self, client):
        register(client)
        client.cookies.clear()

        response = client.post('/api/auth/login', json={'email': 'asha@college.edu', 'password': PASSWORD})
        assert response.status_code == 200
        token = response.json()['token']
        client.cookies.clear()

        me = client.get('/api/auth/me', headers={'Authorization': f'Bearer {token}'})
        assert me.status_code == 200
        assert me.json()['email'] == 'asha@college.edu'
        assert me.json()['last_login'] is not None

    def test_cookie_authenticates(self, client):
        register(client)
        me = client.get('/api/auth/me')
        assert me.status_code == 200

    def test_wrong_password(self, client):
        register(client)
        response = client.post('/api/auth/login', json={'email': 'asha@college.edu', 'password': 'Wrong1234'})
        assert response.status_code == 401
        assert response.json() == {'error': 'Invalid credentials'}

    def test_logout_clears_cookie(self, client):
        register(client)
        client.post('/api/auth/logout')
        assert client.get('/api/auth/me').status_code == 401

    def test_missing_token(self, client):
        response = client.get('/api/auth/me')
        assert response.status_code == 401
        assert response.json() == {'error': 'Authentication required'}

    def test_garbage_token(self, client):
        response = client.get('/api/auth/me', headers={'Authorization': 'Bearer not-a-jwt'})
        assert response.status_code == 401
        assert response.json() == {'error': 'Invalid or expired token'}

    def test_deactivated_account(self, client, admin, make_participant):
        participant = make_participant()
        client.delete(f"/api/admin/users/{participant['user']['id']}", headers=admin['headers'])

        response = client.post('/api/auth/login', json={'email': participant['email'], 'password': PASSWORD})
        assert response.status_code == 401
        assert response.json()['error'] == 'Account is deactivated'


class TestChangePassword:

    def test_change_password(self, client, make_participant):
        participant = make_participant()
        response = client.post('/api/auth/change-password', headers=participant['headers'], json={
            'current_password': PASSWORD,
            'new_password': 'NewPassw0rd9',
            'confirm_password': 'NewPassw0rd9',
        })
        assert response.status_code == 200

        login = client.post('/api/auth/login', json={'email': participant['email'], 'password': 'NewPassw0rd9'})
        assert login.status_code == 200

    def test_wrong_current_password(self, client, make_participant):
        participant = make_participant()
        response = client.post('/api/auth/change-password', headers=participant['headers'], json={
            'current_password': 'Nope12345',
            'new_password': 'NewPassw0rd9',
            'confirm_password': 'NewPassw0rd9',
        })
        assert response.status_code == 400
        assert response.json()['error'] == 'Current password is incorrect'

    def test_mismatched_confirmation(self, client, make_participant):
        participant = make_participant()
        response = client.post('/api/auth/change-password', headers=participant['headers'], json={
            'current_password': PASSWORD,
            'new_password': 'NewPassw0rd9',
            'confirm_password': 'NewPassw0rd8',
        })
        assert response.status_code == 400
        assert response.json()['error'] == 'New passwords do not match'


class TestIssuedTokens:

    def test_deleted_user_token_stops_working(self, client, admin, make_participant, create_event):
        event = create_event(admin['headers'])
        participant = make_participant()
        client.delete(f"/api/admin/users/{participant['user']['id']}", headers=admin['headers'])

        response = client.post(f"/api/events/{event['id']}/register", headers=participant['headers'])
        assert response.status_code == 401
        assert response.json() == {'error': 'Account is deactivated'}

    def test_unapproved_organizer_token_stops_working(self, client, admin, make_organizer):
        organizer = make_organizer()
        client.put(f"/api/admin/users/{organizer['user']['id']}", headers=admin['headers'],
                   json={'is_approved': False})

        response = client.get('/api/organizer/events', headers=organizer['headers'])
        assert response.status_code == 401
        assert response.json() == {'error': 'Account pending approval from administrator'}

    def test_role_change_applies_to_existing_token(self, client, admin, make_organizer):
        organizer = make_organizer()
        client.put(f"/api/admin/users/{organizer['user']['id']}", headers=admin['headers'],
                   json={'role': 'participant'})

        response = client.get('/api/organizer/events', headers=organizer['headers'])
        assert response.status_code == 403
        assert response.json() == {'error': 'Insufficient permissions'}
