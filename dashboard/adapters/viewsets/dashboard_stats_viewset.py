from django.db.models import Count, Q, Sum
from rest_framework import viewsets
from rest_framework.response import Response

from project.models import Project, ProjectStatus
from task.adapters.serializers.task_serializer import TaskSerializer
from task.models import Status, Task
from time_tracking.models import TimeEntry
from utils.access import WORKSPACE, accessible
from utils.dates import local_day_bounds

DASHBOARD_PROJECTS = 4
RECENT_TASKS = 5


def percentage(part, whole):
    """Rounded half-up percentage, 0 for an empty whole."""
    if not whole:
        return 0
    return int(part * 100 / whole + 0.5)


class DashboardViewset(viewsets.ViewSet):

    def stats(self, request):
        """
        Dashboard numbers for the authenticated user.

        Task counts cover tasks the user created or is assigned to, inside
        workspaces the user belongs to. Only TODO, IN_PROGRESS and DONE get a
        bucket of their own, so the three buckets do not have to add up to
        ``totalTasks``.
        """
        user = request.user

        # 1. Tasks created by or assigned to the user
        tasks = self._get_user_tasks(user)

        # 2. Projects of every workspace the user belongs to
        projects = accessible(user, 'project', via=WORKSPACE)

        # 3. Time logged today
        today_seconds = self._get_today_seconds(user)

        return Response({
            **self._get_task_counts(tasks),
            'todayTimeSeconds': today_seconds,
            'todayTimeMinutes': today_seconds // 60,
            'todayTime': round(today_seconds / 3600, 1),
            'totalProjects': projects.count(),
            'activeProjects': projects.filter(status=ProjectStatus.ACTIVE).count(),
            'recentTasks': self._get_recent_tasks(tasks),
            'projects': self._get_project_progress(projects),
        })

    def _get_user_tasks(self, user):
        visible = accessible(user, 'task', via=WORKSPACE).values('pk')
        return Task.objects.filter(Q(created_by=user) | Q(assignee=user), pk__in=visible)

    def _get_task_counts(self, tasks):
        counts = tasks.aggregate(
            total=Count('id'),
            in_progress=Count('id', filter=Q(status=Status.IN_PROGRESS)),
            completed=Count('id', filter=Q(status=Status.DONE)),
            todo=Count('id', filter=Q(status=Status.TODO)),
        )
        return {
            'totalTasks': counts['total'],
            'inProgressTasks': counts['in_progress'],
            'completedTasks': counts['completed'],
            'todoTasks': counts['todo'],
        }

    def _get_today_seconds(self, user):
        start, end = local_day_bounds()
        total = (
            TimeEntry.objects.filter(user=user, start_time__gte=start, start_time__lt=end)
            .aggregate(total=Sum('duration'))['total']
        )
        return total or 0

    def _get_recent_tasks(self, tasks):
        recent = (
            tasks.select_related('project', 'created_by__profile', 'assignee__profile')
            .annotate(
                comment_count=Count('comments', distinct=True),
                time_entry_count=Count('time_entries', distinct=True),
            )
            .order_by('-updated_at')[:RECENT_TASKS]
        )
        return TaskSerializer(recent, many=True).data

    def _get_project_progress(self, projects):
        rows = (
            Project.objects.filter(pk__in=projects.values('pk'))
            .annotate(
                total_tasks=Count('tasks'),
                completed_tasks=Count('tasks', filter=Q(tasks__status=Status.DONE)),
            )
            .order_by('-created_at')[:DASHBOARD_PROJECTS]
        )
        return [
            {
                'id': project.id,
                'name': project.name,
                'color': project.color,
                'status': project.status,
                'totalTasks': project.total_tasks,
                'completedTasks': project.completed_tasks,
                'progress': percentage(project.completed_tasks, project.total_tasks),
            }
            for project in rows
        ]
