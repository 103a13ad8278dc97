import pytest
from django.contrib.auth.models import User
from rest_framework.test import APIClient

from project.models import Project, ProjectMember
from task.models import Task
from user.models import UserProfile
from workspace.models import MemberRole, Workspace, WorkspaceMember


@pytest.fixture
def make_user(db):
    def _make(email, name=None, password='secret123'):
        name = name or email.split('@')[0].title()
        user = User.objects.create_user(username=email, email=email, password=password, first_name=name)
        UserProfile.objects.create(user=user, name=name)
        return user
    return _make


@pytest.fixture
def user(make_user):
    return make_user('owner@example.com', 'Olivia Owner')


@pytest.fixture
def member(make_user):
    return make_user('member@example.com', 'Max Member')


@pytest.fixture
def outsider(make_user):
    return make_user('outsider@example.com', 'Otto Outsider')


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def client_for():
    def _client(user):
        client = APIClient()
        client.force_authenticate(user=user)
        return client
    return _client


@pytest.fixture
def auth_client(client_for, user):
    return client_for(user)


@pytest.fixture
def workspace(user):
    return Workspace.objects.create_for_owner(user, name='Acme')


@pytest.fixture
def add_workspace_member():
    def _add(workspace, user, role=MemberRole.MEMBER):
        return WorkspaceMember.objects.create(workspace=workspace, user=user, role=role)
    return _add


@pytest.fixture
def add_project_member():
    def _add(project, user, role=MemberRole.MEMBER):
        return ProjectMember.objects.create(project=project, user=user, role=role)
    return _add


@pytest.fixture
def project(user, workspace):
    return Project.objects.create_for_owner(user, workspace=workspace, name='Website')


@pytest.fixture
def make_task(user, project):
    def _make(**fields):
        fields.setdefault('title', 'Write copy')
        fields.setdefault('project', project)
        fields.setdefault('created_by', user)
        return Task.objects.create(**fields)
    return _make


@pytest.fixture
def task(make_task):
    return make_task()
