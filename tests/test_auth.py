"""
Tests for authentication, users and API error handling.
"""
import pytest

from apps.core.auth import issue_token
from apps.core.models import Organization, Role, User
from apps.reports.models import ActivityLog
from tests.conftest import PASSWORD

pytestmark = pytest.mark.django_db


class TestRegisterAndLogin:
    def test_register_with_organization_creates_admin(self, api):
        response = api.post('/api/auth/register/', {
            'name': "Ada",
            'email': "Ada@Example.com",
            'password': "secret123",
            'organization_name': "Initech",
        })

        assert response.status_code == 200
        body = response.json()
        assert body['token']
        assert body['user']['role'] == Role.ADMIN
        assert response.cookies['token'].value == body['token']

        user = User.objects.get(email="ada@example.com")
        organization = Organization.objects.get(name="Initech")
        assert user.organization == organization
        assert organization.owner == user

    def test_register_without_organization_creates_member(self, api):
        response = api.post('/api/auth/register/', {
            'name': "Bob", 'email': "bob@example.com", 'password': "secret123",
        })

        assert response.json()['user']['role'] == Role.MEMBER
        assert response.json()['user']['organization'] is None

    def test_duplicate_email(self, api, member):
        response = api.post('/api/auth/register/', {
            'name': "Again", 'email': member.email, 'password': "secret123",
        })

        assert response.status_code == 400
        assert "User already exists" in response.json()['message']

    def test_short_password(self, api):
        response = api.post('/api/auth/register/', {'name': "Eve", 'email': "eve@example.com", 'password': "123"})

        assert response.status_code == 400

    def test_login(self, api, member):
        response = api.post('/api/auth/login/', {'email': member.email, 'password': PASSWORD})

        assert response.status_code == 200
        assert response.json()['user']['id'] == member.id
        assert ActivityLog.objects.filter(user=member, action=ActivityLog.Action.LOGIN).exists()

    def test_login_missing_fields(self, api):
        response = api.post('/api/auth/login/', {'email': "someone@example.com"})

        assert response.status_code == 400
        assert response.json()['message'] == "Please provide an email and password"

    def test_login_bad_credentials(self, api, member):
        response = api.post('/api/auth/login/', {'email': member.email, 'password': "wrong-pass"})

        assert response.status_code == 401
        assert response.json() == {'success': False, 'message': "Invalid credentials"}

    def test_logout_clears_cookie(self, api, member):
        response = api.as_user(member).post('/api/auth/logout/')

        assert response.status_code == 200
        assert response.cookies['token'].value == ''


class TestTokenAuthentication:
    def test_me_with_bearer_token(self, api, member, organization):
        data = api.as_user(member).get('/api/auth/me/').json()['data']

        assert data['id'] == member.id
        assert data['organization']['name'] == organization.name

    def test_me_with_cookie(self, client, member):
        client.cookies['token'] = issue_token(member)

        assert client.get('/api/auth/me/').json()['data']['id'] == member.id

    def test_missing_or_tampered_token(self, api, client, member):
        assert api.get('/api/auth/me/').status_code == 401

        response = client.get('/api/auth/me/', HTTP_AUTHORIZATION=f"Bearer {issue_token(member)}x")
        assert response.status_code == 401

    def test_inactive_user_is_rejected(self, api, member):
        member.is_active = False
        member.save()

        assert api.as_user(member).get('/api/auth/me/').status_code == 401


class TestUsers:
    def test_list_is_organization_scoped(self, api, admin, member, make_user, other_organization):
        make_user(organization=other_organization)

        data = api.as_user(member).get('/api/users/').json()

        assert {u['id'] for u in data['data']} == {admin.id, member.id}

    def test_admin_creates_member(self, api, admin, organization):
        response = api.as_user(admin).post('/api/users/', {
            'name': "New Hire", 'email': "hire@example.com", 'password': "Tr0ub4dor-hire", 'role': 'team_lead',
        })

        assert response.status_code == 201
        user = User.objects.get(email="hire@example.com")
        assert user.organization == organization
        assert user.role == Role.TEAM_LEAD

    def test_non_admin_cannot_create(self, api, pm):
        response = api.as_user(pm).post('/api/users/', {
            'name': "x", 'email': "x@example.com", 'password': "secret123",
        })

        assert response.status_code == 403


class TestErrorHandling:
    def test_invalid_json_body(self, api, pm, client):
        response = client.post(
            '/api/projects/', 'not json',
            content_type='application/json',
            HTTP_AUTHORIZATION=f"Bearer {issue_token(pm)}"
        )

        assert response.status_code == 400
        assert response.json() == {'success': False, 'message': "Invalid JSON body"}

    def test_method_not_allowed(self, api, member):
        assert api.as_user(member).delete('/api/projects/').status_code == 405
