import pytest

from time_tracking.models import ActiveTimer, TimeEntry

pytestmark = pytest.mark.django_db


def start_url(task):
    return f'/api/tasks/{task.id}/timer/start'


def test_no_timer_by_default(auth_client):
    response = auth_client.get('/api/timer')

    assert response.status_code == 200
    assert response.json() == {'timer': None}


def test_start_and_read_back(auth_client, task):
    response = auth_client.post(start_url(task), {'description': 'Focus'}, format='json')

    assert response.status_code == 201
    assert response.json()['timer']['taskId'] == task.id

    current = auth_client.get('/api/timer').json()['timer']
    assert current['description'] == 'Focus'
    assert current['elapsedSeconds'] >= 0


def test_starting_the_same_task_again_returns_the_running_timer(auth_client, task):
    first = auth_client.post(start_url(task), format='json')
    second = auth_client.post(start_url(task), format='json')

    assert second.status_code == 200
    assert second.json()['timer']['id'] == first.json()['timer']['id']
    assert ActiveTimer.objects.count() == 1


def test_starting_another_task_conflicts(auth_client, task, make_task):
    other = make_task(title='Other')
    auth_client.post(start_url(task), format='json')

    response = auth_client.post(start_url(other), format='json')

    assert response.status_code == 409
    assert ActiveTimer.objects.get().task_id == task.id


def test_stop_records_a_stopwatch_entry(auth_client, user, task):
    auth_client.post(start_url(task), {'description': 'Deep work'}, format='json')

    response = auth_client.post('/api/timer/stop')

    assert response.status_code == 201
    entry = TimeEntry.objects.get()
    assert entry.user == user
    assert entry.task == task
    assert entry.is_manual is False
    assert entry.description == 'Deep work'
    assert entry.end_time >= entry.start_time
    assert not ActiveTimer.objects.exists()


def test_stop_without_timer_is_not_found(auth_client):
    assert auth_client.post('/api/timer/stop').status_code == 404


def test_discard_drops_the_timer_without_an_entry(auth_client, task):
    auth_client.post(start_url(task), format='json')

    response = auth_client.delete('/api/timer')
    assert response.status_code == 200
    assert response.json() == {'message': 'Timer discarded'}
    assert auth_client.delete('/api/timer').status_code == 404
    assert not TimeEntry.objects.exists()


def test_summary_reports_the_running_timer(auth_client, task):
    auth_client.post(start_url(task), format='json')

    body = auth_client.get(f'/api/tasks/{task.id}/time-summary').json()

    assert body['running'] is True
    assert body['runningSeconds'] >= 0


def test_cannot_start_a_timer_on_a_foreign_task(client_for, outsider, task):
    assert client_for(outsider).post(start_url(task), format='json').status_code == 404
