import pytest

from task.models import Comment, Priority, Status, Task
from time_tracking.models import TimeEntry
from workspace.models import Workspace

pytestmark = pytest.mark.django_db


def test_create_task_with_defaults(auth_client, user, project):
    response = auth_client.post('/api/tasks', {'title': 'Draft homepage', 'projectId': project.id}, format='json')

    assert response.status_code == 201
    body = response.json()
    assert body['status'] == Status.TODO
    assert body['priority'] == Priority.MEDIUM
    assert body['projectId'] == project.id
    assert body['createdBy']['id'] == user.id
    assert body['assignee'] is None
    assert body['commentCount'] == 0


def test_create_task_in_foreign_project_is_forbidden(client_for, outsider, project):
    Workspace.objects.create_for_owner(outsider, name='Mine')

    response = client_for(outsider).post('/api/tasks', {'title': 'Nope', 'projectId': project.id}, format='json')

    assert response.status_code == 403
    assert not Task.objects.filter(title='Nope').exists()


def test_create_task_rejects_assignee_outside_the_workspace(auth_client, project, outsider):
    response = auth_client.post(
        '/api/tasks',
        {'title': 'Delegate', 'projectId': project.id, 'assigneeId': outsider.id},
        format='json',
    )

    assert response.status_code == 400
    assert response.json() == {'error': 'The assigned user is not a member of the workspace'}
    assert not Task.objects.filter(title='Delegate').exists()


def test_create_task_with_workspace_member_as_assignee(auth_client, workspace, project, member, add_workspace_member):
    add_workspace_member(workspace, member)

    response = auth_client.post(
        '/api/tasks',
        {'title': 'Delegate', 'projectId': project.id, 'assigneeId': member.id, 'priority': 'HIGH'},
        format='json',
    )

    assert response.status_code == 201
    assert response.json()['assignee']['id'] == member.id
    assert response.json()['priority'] == 'HIGH'


def test_update_with_invalid_assignee_leaves_task_untouched(auth_client, task, outsider):
    response = auth_client.patch(
        f'/api/tasks/{task.id}', {'title': 'Changed', 'assigneeId': outsider.id}, format='json',
    )

    assert response.status_code == 400
    task.refresh_from_db()
    assert task.title == 'Write copy'
    assert task.assignee is None


def test_update_with_null_assignee_unassigns(auth_client, workspace, member, add_workspace_member, make_task):
    add_workspace_member(workspace, member)
    task = make_task(assignee=member)

    response = auth_client.patch(f'/api/tasks/{task.id}', {'assigneeId': None}, format='json')

    assert response.status_code == 200
    assert response.json()['assignee'] is None


def test_any_status_is_accepted_and_last_write_wins(auth_client, task):
    first = auth_client.patch(f'/api/tasks/{task.id}', {'status': 'DONE'}, format='json')
    second = auth_client.patch(f'/api/tasks/{task.id}', {'status': 'CANCELLED'}, format='json')

    assert first.status_code == 200
    assert second.status_code == 200
    task.refresh_from_db()
    assert task.status == Status.CANCELLED


def test_unknown_status_is_rejected(auth_client, task):
    response = auth_client.patch(f'/api/tasks/{task.id}', {'status': 'ARCHIVED'}, format='json')

    assert response.status_code == 400
    assert 'status' in response.json()['details']


def test_list_is_scoped_to_the_callers_workspaces(client_for, auth_client, outsider, task):
    assert [t['id'] for t in auth_client.get('/api/tasks').json()] == [task.id]
    assert client_for(outsider).get('/api/tasks').json() == []


def test_list_filters(auth_client, make_task):
    done = make_task(title='Shipped', status=Status.DONE)
    make_task(title='Pending')

    response = auth_client.get('/api/tasks?status=DONE')

    assert [t['id'] for t in response.json()] == [done.id]


def test_list_can_be_paginated(auth_client, make_task):
    for n in range(3):
        make_task(title=f'Task {n}')

    response = auth_client.get('/api/tasks?page_size=2')

    body = response.json()
    assert body['totalItems'] == 3
    assert body['totalPages'] == 2
    assert len(body['results']) == 2


def test_detail_includes_comments_and_time_entries(auth_client, user, task):
    Comment.objects.create(task=task, author=user, content='Looks good')
    TimeEntry.objects.create(task=task, user=user, duration=600, is_manual=True)

    response = auth_client.get(f'/api/tasks/{task.id}')

    assert response.status_code == 200
    body = response.json()
    assert [c['content'] for c in body['comments']] == ['Looks good']
    assert body['timeEntries'][0]['duration'] == 600
    assert body['commentCount'] == 1
    assert body['timeEntryCount'] == 1


def test_detail_outside_workspace_is_not_found(client_for, outsider, task):
    assert client_for(outsider).get(f'/api/tasks/{task.id}').status_code == 404


def test_delete_task(auth_client, task):
    response = auth_client.delete(f'/api/tasks/{task.id}')

    assert response.status_code == 200
    assert response.json() == {'message': 'Task deleted successfully'}
    assert not Task.objects.filter(pk=task.pk).exists()


def test_create_task_in_unknown_project_is_forbidden(auth_client):
    response = auth_client.post('/api/tasks', {'title': 'Ghost', 'projectId': 999999}, format='json')

    assert response.status_code == 403
    assert not Task.objects.filter(title='Ghost').exists()


def test_commenting_on_a_foreign_task_is_not_found(client_for, outsider, task):
    response = client_for(outsider).post(f'/api/tasks/{task.id}/comments', {'content': 'Hi'}, format='json')

    assert response.status_code == 404
    assert not Comment.objects.exists()
