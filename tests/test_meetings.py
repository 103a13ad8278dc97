import pytest

from meeting.models import Meeting
from project.models import Project

pytestmark = pytest.mark.django_db


def meeting_payload(project, **overrides):
    payload = {
        'name': 'Sprint planning',
        'date': '2025-06-02T09:00:00Z',
        'duration': 45,
        'type': 'TEAM',
        'location': 'REMOTE',
        'projectId': project.id,
    }
    payload.update(overrides)
    return payload


def test_create_meeting_with_attendees(auth_client, user, project, member, add_project_member):
    add_project_member(project, member)

    response = auth_client.post(
        '/api/meetings', meeting_payload(project, attendeeIds=[user.id, member.id, member.id]), format='json',
    )

    assert response.status_code == 201
    body = response.json()
    assert body['createdBy']['id'] == user.id
    assert sorted(a['userId'] for a in body['attendees']) == sorted([user.id, member.id])


def test_attendees_must_be_project_members(auth_client, project, outsider):
    response = auth_client.post('/api/meetings', meeting_payload(project, attendeeIds=[outsider.id]), format='json')

    assert response.status_code == 400
    assert response.json() == {'error': 'Some attendees are not members of this project'}
    assert not Meeting.objects.exists()


def test_non_member_cannot_create(client_for, outsider, project):
    response = client_for(outsider).post('/api/meetings', meeting_payload(project), format='json')

    assert response.status_code == 403
    assert not Meeting.objects.exists()


@pytest.mark.parametrize('field, value', [
    ('duration', 0),
    ('type', 'PARTY'),
    ('location', 'MOON'),
    ('name', ''),
])
def test_create_validates_fields(auth_client, project, field, value):
    response = auth_client.post('/api/meetings', meeting_payload(project, **{field: value}), format='json')

    assert response.status_code == 400
    assert field in response.json()['details']


def test_list_for_one_project_is_date_descending(auth_client, user, project):
    Meeting.objects.create_with_attendees(
        project=project, created_by=user, name='Kickoff', date='2025-01-01T09:00:00Z',
        duration=30, type='TEAM', location='REMOTE',
    )
    Meeting.objects.create_with_attendees(
        project=project, created_by=user, name='Retro', date='2025-02-01T09:00:00Z',
        duration=30, type='TEAM', location='REMOTE',
    )

    response = auth_client.get(f'/api/meetings?projectId={project.id}')

    assert response.status_code == 200
    assert [m['name'] for m in response.json()] == ['Retro', 'Kickoff']


def test_list_for_foreign_project_is_forbidden(client_for, outsider, project):
    assert client_for(outsider).get(f'/api/meetings?projectId={project.id}').status_code == 403


def test_list_without_project_groups_by_project(auth_client, user, workspace, project):
    other = Project.objects.create_for_owner(user, workspace=workspace, name='Apps')
    Meeting.objects.create_with_attendees(
        project=project, created_by=user, name='Standup', date='2025-01-01T09:00:00Z',
        duration=15, type='TEAM', location='IN_PERSON',
    )

    response = auth_client.get('/api/meetings')

    assert response.status_code == 200
    body = response.json()
    assert [p['name'] for p in body] == [other.name, project.name]
    assert body[0]['meetings'] == []
    assert [m['name'] for m in body[1]['meetings']] == ['Standup']
