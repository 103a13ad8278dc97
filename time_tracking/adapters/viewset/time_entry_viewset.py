import logging

from django.db.models import Sum
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import serializers, status, viewsets
from rest_framework.response import Response

from time_tracking.models import ActiveTimer, TimeEntry
from utils.access import get_accessible_or_404
from utils.dates import local_day_bounds
from workspace.models import MANAGER_ROLES
from ..serializers.time_entry_serializer import TimeEntrySerializer, TimeEntryWriteSerializer

logger = logging.getLogger(__name__)

DATE_PARAM = OpenApiParameter('date', str, description='Local day, YYYY-MM-DD')


class DayQuerySerializer(serializers.Serializer):
    date = serializers.DateField(required=False)


def filter_by_day(queryset, request):
    params = DayQuerySerializer(data=request.query_params)
    params.is_valid(raise_exception=True)
    day = params.validated_data.get('date')
    if day is None:
        return queryset, None
    start, end = local_day_bounds(day)
    return queryset.filter(start_time__gte=start, start_time__lt=end), day


class TimeEntryViewSet(viewsets.ViewSet):
    """
    Time entries. Durations are seconds on the way in and on the way out.
    """

    def _task(self, request, pk):
        return get_accessible_or_404(request.user, 'task', pk, message="Task not found or access denied")

    @extend_schema(parameters=[DATE_PARAM], responses={200: TimeEntrySerializer(many=True)})
    def list(self, request):
        """The caller's own entries, newest first."""
        entries, _ = filter_by_day(
            TimeEntry.objects.filter(user=request.user).select_related('user__profile'),
            request,
        )
        return Response(TimeEntrySerializer(entries.order_by('-start_time', '-created_at'), many=True).data)

    @extend_schema(parameters=[DATE_PARAM], responses={200: TimeEntrySerializer(many=True)})
    def task_entries(self, request, pk=None):
        task = self._task(request, pk)
        entries, _ = filter_by_day(task.time_entries.select_related('user__profile'), request)
        return Response(TimeEntrySerializer(entries.order_by('-start_time', '-created_at'), many=True).data)

    @extend_schema(request=TimeEntryWriteSerializer, responses={201: TimeEntrySerializer})
    def create(self, request, pk=None):
        task = self._task(request, pk)
        serializer = TimeEntryWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        entry = serializer.save(task=task, user=request.user)
        logger.info(
            f"User {request.user.id} logged {entry.duration}s on task {task.id} "
            f"({'manual' if entry.is_manual else 'stopwatch'})"
        )
        return Response(TimeEntrySerializer(entry).data, status=status.HTTP_201_CREATED)

    @extend_schema(parameters=[DATE_PARAM])
    def summary(self, request, pk=None):
        """Seconds the caller tracked on one task for a day (today by default)."""
        task = self._task(request, pk)
        entries, day = filter_by_day(task.time_entries.filter(user=request.user), request)
        if day is None:
            start, end = local_day_bounds()
            entries = entries.filter(start_time__gte=start, start_time__lt=end)
            day = start.date()
        tracked = entries.aggregate(total=Sum('duration'))['total'] or 0

        timer = ActiveTimer.objects.filter(user=request.user, task=task).first()
        return Response({
            'taskId': task.id,
            'date': day.isoformat(),
            'trackedSeconds': tracked,
            'running': timer is not None,
            'runningSeconds': timer.elapsed_seconds() if timer else 0,
        })

    def destroy(self, request, pk=None):
        # Author, or OWNER/ADMIN of the task's workspace; anyone else gets a 404
        entry = get_accessible_or_404(
            request.user, 'time_entry', pk,
            roles=MANAGER_ROLES, or_owner=True,
            message="Time entry not found or access denied",
        )
        entry.delete()
        logger.info(f"User {request.user.id} deleted time entry {pk}")
        return Response({'message': 'Time entry deleted successfully'})
