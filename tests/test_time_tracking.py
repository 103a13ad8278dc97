from datetime import datetime, time, timedelta

import pytest
from django.utils import timezone

from time_tracking.models import TimeEntry
from workspace.models import MemberRole

pytestmark = pytest.mark.django_db


def entries_url(task):
    return f'/api/tasks/{task.id}/time-entries'


def test_stopwatch_entry_derives_duration_in_seconds(auth_client, user, task):
    response = auth_client.post(
        entries_url(task),
        {'startTime': '2025-03-01T09:00:00Z', 'endTime': '2025-03-01T10:30:00Z'},
        format='json',
    )

    assert response.status_code == 201
    body = response.json()
    assert body['duration'] == 5400
    assert body['isManual'] is False
    assert body['userId'] == user.id


def test_stopwatch_entry_requires_start_time(auth_client, task):
    response = auth_client.post(entries_url(task), {'description': 'forgot'}, format='json')

    assert response.status_code == 400
    assert 'startTime' in response.json()['details']


def test_end_before_start_is_rejected(auth_client, task):
    response = auth_client.post(
        entries_url(task),
        {'startTime': '2025-03-01T10:00:00Z', 'endTime': '2025-03-01T09:00:00Z'},
        format='json',
    )

    assert response.status_code == 400
    assert not TimeEntry.objects.exists()


def test_manual_entry_requires_positive_duration(auth_client, task):
    missing = auth_client.post(entries_url(task), {'isManual': True}, format='json')
    zero = auth_client.post(entries_url(task), {'isManual': True, 'duration': 0}, format='json')

    assert missing.status_code == 400
    assert zero.status_code == 400
    assert not TimeEntry.objects.exists()


def test_manual_entry_with_date_lands_on_that_local_day(auth_client, task):
    response = auth_client.post(
        entries_url(task),
        {'isManual': True, 'duration': 1800, 'date': '2025-03-04', 'description': 'Call'},
        format='json',
    )

    assert response.status_code == 201
    entry = TimeEntry.objects.get()
    assert entry.duration == 1800
    assert entry.is_manual
    assert timezone.localtime(entry.start_time).date().isoformat() == '2025-03-04'
    assert entry.end_time - entry.start_time == timedelta(seconds=1800)


def test_task_entries_filter_by_day(auth_client, user, task):
    day = timezone.localdate()
    noon = timezone.make_aware(datetime.combine(day, time(12)))
    TimeEntry.objects.create(task=task, user=user, duration=60, start_time=noon)
    TimeEntry.objects.create(task=task, user=user, duration=120, start_time=noon - timedelta(days=1))

    everything = auth_client.get(entries_url(task)).json()
    today = auth_client.get(f'{entries_url(task)}?date={day.isoformat()}').json()

    assert len(everything) == 2
    assert [e['duration'] for e in today] == [60]


def test_invalid_date_is_rejected(auth_client, task):
    response = auth_client.get(f'{entries_url(task)}?date=yesterday')

    assert response.status_code == 400


def test_my_entries_only_lists_the_callers_entries(auth_client, user, member, task):
    TimeEntry.objects.create(task=task, user=user, duration=60, is_manual=True)
    TimeEntry.objects.create(task=task, user=member, duration=90, is_manual=True)

    response = auth_client.get('/api/time-entries')

    assert [e['duration'] for e in response.json()] == [60]


def test_entries_of_a_foreign_task_are_not_found(client_for, outsider, task):
    assert client_for(outsider).get(entries_url(task)).status_code == 404
    assert client_for(outsider).post(
        entries_url(task), {'isManual': True, 'duration': 60}, format='json',
    ).status_code == 404


def test_time_summary_sums_todays_seconds(auth_client, user, task):
    now = timezone.now()
    TimeEntry.objects.create(task=task, user=user, duration=600, start_time=now)
    TimeEntry.objects.create(task=task, user=user, duration=900, start_time=now)
    TimeEntry.objects.create(task=task, user=user, duration=5000, start_time=now - timedelta(days=2))

    response = auth_client.get(f'/api/tasks/{task.id}/time-summary')

    assert response.status_code == 200
    body = response.json()
    assert body['taskId'] == task.id
    assert body['trackedSeconds'] == 1500
    assert body['running'] is False


class TestDeleteTimeEntry:

    @pytest.fixture
    def entry(self, task, member, workspace, add_workspace_member):
        add_workspace_member(workspace, member)
        return TimeEntry.objects.create(task=task, user=member, duration=300, is_manual=True)

    def test_author_can_delete(self, client_for, member, entry):
        response = client_for(member).delete(f'/api/time-entries/{entry.id}')

        assert response.status_code == 200
        assert not TimeEntry.objects.filter(pk=entry.pk).exists()

    def test_workspace_admin_can_delete(self, client_for, make_user, workspace, entry, add_workspace_member):
        admin = make_user('admin@example.com')
        add_workspace_member(workspace, admin, role=MemberRole.ADMIN)

        assert client_for(admin).delete(f'/api/time-entries/{entry.id}').status_code == 200

    def test_other_member_gets_not_found(self, client_for, make_user, workspace, entry, add_workspace_member):
        colleague = make_user('colleague@example.com')
        add_workspace_member(workspace, colleague)

        response = client_for(colleague).delete(f'/api/time-entries/{entry.id}')

        assert response.status_code == 404
        assert TimeEntry.objects.filter(pk=entry.pk).exists()


def test_undated_manual_entry_counts_towards_today(auth_client, task):
    response = auth_client.post(entries_url(task), {'isManual': True, 'duration': 1200}, format='json')

    assert response.status_code == 201
    entry = TimeEntry.objects.get()
    assert timezone.localtime(entry.start_time).date() == timezone.localdate()
    assert entry.end_time - entry.start_time == timedelta(seconds=1200)

    summary = auth_client.get(f'/api/tasks/{task.id}/time-summary').json()
    stats = auth_client.get('/api/dashboard/stats').json()
    assert summary['trackedSeconds'] == 1200
    assert stats['todayTimeSeconds'] == 1200
