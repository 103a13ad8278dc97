import pytest
from django.contrib.auth.models import User

from user.models import SystemRole
from workspace.models import MemberRole, WorkspaceMember

pytestmark = pytest.mark.django_db

REGISTER_URL = '/api/auth/register'
LOGIN_URL = '/api/auth/login'


def register_payload(**overrides):
    payload = {
        'name': 'Jane Doe',
        'email': 'Jane@Example.com',
        'password': 'secret123',
        'confirmPassword': 'secret123',
    }
    payload.update(overrides)
    return payload


def test_register_creates_user_and_personal_workspace(api_client):
    response = api_client.post(REGISTER_URL, register_payload(), format='json')

    assert response.status_code == 201
    body = response.json()
    assert body['message'] == 'User created successfully'
    assert body['user']['email'] == 'jane@example.com'
    assert body['user']['name'] == 'Jane Doe'
    assert body['user']['role'] == SystemRole.MEMBER
    assert 'password' not in body['user']

    user = User.objects.get(email='jane@example.com')
    assert user.password != 'secret123'
    assert user.check_password('secret123')

    membership = WorkspaceMember.objects.select_related('workspace').get(user=user)
    assert membership.role == MemberRole.OWNER
    assert membership.workspace.name == "Jane Doe's Workspace"


def test_register_duplicate_email_is_rejected_without_creating_a_row(api_client, user):
    response = api_client.post(REGISTER_URL, register_payload(email='OWNER@example.com'), format='json')

    assert response.status_code == 400
    assert response.json() == {'error': 'A user with this email already exists'}
    assert User.objects.filter(email__iexact='owner@example.com').count() == 1


def test_register_password_confirmation_must_match(api_client):
    response = api_client.post(REGISTER_URL, register_payload(confirmPassword='different'), format='json')

    assert response.status_code == 400
    body = response.json()
    assert body['error'] == 'Invalid data'
    assert 'confirmPassword' in body['details']
    assert not User.objects.exists()


@pytest.mark.parametrize('field, value', [
    ('name', 'J'),
    ('email', 'not-an-email'),
    ('password', '123'),
])
def test_register_validates_fields(api_client, field, value):
    payload = register_payload(**{field: value})
    if field == 'password':
        payload['confirmPassword'] = value

    response = api_client.post(REGISTER_URL, payload, format='json')

    assert response.status_code == 400
    assert field in response.json()['details']


def test_login_sets_http_only_cookies(api_client, user):
    response = api_client.post(LOGIN_URL, {'email': 'owner@example.com', 'password': 'secret123'}, format='json')

    assert response.status_code == 200
    assert response.json()['user']['email'] == 'owner@example.com'
    assert 'access' not in response.json()
    for name in ('access_token', 'refresh_token'):
        assert response.cookies[name].value
        assert response.cookies[name]['httponly']


def test_login_with_bad_credentials_returns_401(api_client, user):
    response = api_client.post(LOGIN_URL, {'email': 'owner@example.com', 'password': 'wrong'}, format='json')

    assert response.status_code == 401
    assert response.json() == {'error': 'Invalid email or password'}


def test_session_reads_the_access_cookie(api_client, user):
    api_client.post(LOGIN_URL, {'email': 'owner@example.com', 'password': 'secret123'}, format='json')

    response = api_client.get('/api/auth/session')

    assert response.status_code == 200
    assert response.json()['user']['id'] == user.id


def test_refresh_reissues_the_access_cookie(api_client, user):
    api_client.post(LOGIN_URL, {'email': 'owner@example.com', 'password': 'secret123'}, format='json')

    response = api_client.post('/api/auth/token/refresh')

    assert response.status_code == 200
    assert response.cookies['access_token'].value


def test_refresh_without_cookie_returns_401(api_client):
    response = api_client.post('/api/auth/token/refresh')

    assert response.status_code == 401


def test_logout_clears_cookies(auth_client):
    response = auth_client.post('/api/auth/logout')

    assert response.status_code == 200
    assert response.cookies['access_token'].value == ''
    assert response.cookies['refresh_token'].value == ''


@pytest.mark.parametrize('url', [
    '/api/auth/session',
    '/api/workspaces',
    '/api/projects',
    '/api/tasks',
    '/api/time-entries',
    '/api/meetings',
    '/api/dashboard/stats',
    '/api/notifications',
])
def test_unauthenticated_requests_are_rejected(api_client, url):
    response = api_client.get(url)

    assert response.status_code == 401
    assert response.json() == {'error': 'Not authenticated'}


def test_notifications_are_always_empty(auth_client):
    response = auth_client.get('/api/notifications')

    assert response.status_code == 200
    assert response.json() == []


def test_register_rejects_email_longer_than_the_username_column(api_client):
    email = f"{'a' * 64}@{'b' * 60}.{'c' * 60}.example.com"

    response = api_client.post(REGISTER_URL, register_payload(email=email), format='json')

    assert response.status_code == 400
    assert 'email' in response.json()['details']
    assert not User.objects.exists()
