import logging

from django.db import IntegrityError, transaction
from django.utils import timezone
from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.exceptions import NotFound
from rest_framework.response import Response

from pms.exceptions import TimerConflict
from time_tracking.models import ActiveTimer, TimeEntry
from utils.access import get_accessible_or_404
from ..serializers.time_entry_serializer import ActiveTimerSerializer, StartTimerSerializer, TimeEntrySerializer

logger = logging.getLogger(__name__)


class TimerViewSet(viewsets.ViewSet):
    """
    The caller's running stopwatch, kept on the server so it survives reloads
    and devices. A user has at most one; the first one started wins until it
    is stopped or discarded.
    """

    def _running(self, request):
        return ActiveTimer.objects.select_related('task').filter(user=request.user).first()

    @extend_schema(responses={200: ActiveTimerSerializer})
    def current(self, request):
        timer = self._running(request)
        return Response({'timer': ActiveTimerSerializer(timer).data if timer else None})

    @extend_schema(request=StartTimerSerializer, responses={201: ActiveTimerSerializer})
    def start(self, request, pk=None):
        task = get_accessible_or_404(request.user, 'task', pk, message="Task not found or access denied")
        serializer = StartTimerSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        timer = self._running(request)
        if timer is not None:
            if timer.task_id == task.id:
                return Response({'timer': ActiveTimerSerializer(timer).data})
            raise TimerConflict("A timer is already running on another task. Stop it first.")

        try:
            with transaction.atomic():
                timer = ActiveTimer.objects.create(
                    user=request.user,
                    task=task,
                    description=serializer.validated_data.get('description'),
                )
        except IntegrityError:
            raise TimerConflict("A timer is already running on another task. Stop it first.")

        logger.info(f"User {request.user.id} started a timer on task {task.id}")
        return Response({'timer': ActiveTimerSerializer(timer).data}, status=status.HTTP_201_CREATED)

    @extend_schema(responses={201: TimeEntrySerializer})
    def stop(self, request):
        """Close the running timer into a stopwatch time entry."""
        timer = ActiveTimer.objects.select_for_update().filter(user=request.user).first()
        if timer is None:
            raise NotFound("No timer is running")

        now = timezone.now()
        entry = TimeEntry.objects.create(
            task_id=timer.task_id,
            user=request.user,
            description=timer.description,
            duration=timer.elapsed_seconds(now),
            start_time=timer.start_time,
            end_time=now,
            is_manual=False,
        )
        timer.delete()
        logger.info(f"User {request.user.id} stopped the timer on task {entry.task_id} after {entry.duration}s")
        return Response(TimeEntrySerializer(entry).data, status=status.HTTP_201_CREATED)

    def discard(self, request):
        deleted, _ = ActiveTimer.objects.filter(user=request.user).delete()
        if not deleted:
            raise NotFound("No timer is running")
        logger.info(f"User {request.user.id} discarded the running timer")
        return Response({'message': 'Timer discarded'})
