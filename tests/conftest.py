"""
Test configuration and fixtures for the ProjectHub test suite.
"""
import pytest
from django.test import Client

from apps.core.auth import issue_token
from apps.core.models import Organization, Role, User
from apps.projects.models import Project
from apps.tasks.models import Task

PASSWORD = "secret123"


class ApiClient:
    """Django test client speaking JSON with a bearer token."""

    def __init__(self, client, user=None):
        self.client = client
        self.user = user

    def as_user(self, user):
        return ApiClient(self.client, user)

    def _headers(self):
        if self.user is None:
            return {}
        return {'HTTP_AUTHORIZATION': f'Bearer {issue_token(self.user)}'}

    def get(self, path, params=None):
        return self.client.get(path, params or {}, **self._headers())

    def post(self, path, data=None):
        return self.client.post(path, data or {}, content_type='application/json', **self._headers())

    def put(self, path, data=None):
        return self.client.put(path, data or {}, content_type='application/json', **self._headers())

    def delete(self, path):
        return self.client.delete(path, **self._headers())

    def upload(self, path, data):
        """Multipart POST (file uploads)."""
        return self.client.post(path, data, **self._headers())


@pytest.fixture(autouse=True)
def fast_password_hasher(settings):
    settings.PASSWORD_HASHERS = ['django.contrib.auth.hashers.MD5PasswordHasher']


@pytest.fixture
def organization(db):
    return Organization.objects.create(name="Acme")


@pytest.fixture
def other_organization(db):
    return Organization.objects.create(name="Globex")


@pytest.fixture
def make_user(db, organization):
    counter = {'n': 0}

    def factory(role=Role.MEMBER, name=None, organization=organization):
        counter['n'] += 1
        email = f"user{counter['n']}@example.com"
        return User.objects.create_user(
            username=email,
            email=email,
            password=PASSWORD,
            name=name or f"User {counter['n']}",
            role=role,
            organization=organization,
        )

    return factory


@pytest.fixture
def admin(make_user):
    return make_user(Role.ADMIN, name="Alice Admin")


@pytest.fixture
def pm(make_user):
    return make_user(Role.PROJECT_MANAGER, name="Paul Manager")


@pytest.fixture
def team_lead(make_user):
    return make_user(Role.TEAM_LEAD, name="Tina Lead")


@pytest.fixture
def member(make_user):
    return make_user(Role.MEMBER, name="Mark Member")


@pytest.fixture
def other_member(make_user):
    return make_user(Role.MEMBER, name="Olga Member")


@pytest.fixture
def api():
    return ApiClient(Client())


@pytest.fixture
def project(organization, pm, member):
    project = Project.objects.create(
        title="Website",
        description="Company website relaunch",
        key="web",
        manager=pm,
        organization=organization,
    )
    project.members.add(member)
    return project


@pytest.fixture
def make_task(project, pm):
    def factory(title, status='todo', reporter=None, project=project, **kwargs):
        return Task.objects.create(
            title=title,
            status=status,
            project=project,
            reporter=reporter or pm,
            **kwargs
        )

    return factory
