from datetime import timedelta

from django.utils import timezone
from rest_framework import serializers

from task.models import Task
from time_tracking.models import ActiveTimer, TimeEntry
from user.adapters.serializers.user_serializers import UserSummarySerializer
from utils.dates import local_day_bounds


class TimeEntrySerializer(serializers.ModelSerializer):
    taskId = serializers.IntegerField(source='task_id', read_only=True)
    userId = serializers.IntegerField(source='user_id', read_only=True)
    user = UserSummarySerializer(read_only=True)
    startTime = serializers.DateTimeField(source='start_time', read_only=True)
    endTime = serializers.DateTimeField(source='end_time', read_only=True)
    isManual = serializers.BooleanField(source='is_manual', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = TimeEntry
        fields = (
            'id', 'taskId', 'userId', 'user', 'description', 'duration',
            'startTime', 'endTime', 'isManual', 'createdAt',
        )


class TimeEntryWriteSerializer(serializers.ModelSerializer):
    """
    Two ways to record time, both with ``duration`` in seconds:

    - stopwatch (``isManual`` false): ``startTime`` required, ``endTime``
      defaults to now and ``duration`` to the span between them
    - manual (``isManual`` true): ``duration`` required; without a
      ``startTime`` the entry starts at local midnight of ``date``, or of
      today when no ``date`` is given
    """
    duration = serializers.IntegerField(min_value=0, required=False)
    startTime = serializers.DateTimeField(source='start_time', required=False, allow_null=True)
    endTime = serializers.DateTimeField(source='end_time', required=False, allow_null=True)
    isManual = serializers.BooleanField(source='is_manual', required=False, default=False)
    date = serializers.DateField(required=False, write_only=True)

    class Meta:
        model = TimeEntry
        fields = ('description', 'duration', 'startTime', 'endTime', 'isManual', 'date')

    def validate(self, attrs):
        day = attrs.pop('date', None)
        start = attrs.get('start_time')
        end = attrs.get('end_time')
        duration = attrs.get('duration')

        if attrs.get('is_manual'):
            if duration is None:
                raise serializers.ValidationError({'duration': ["Duration is required for manual entries"]})
            if duration <= 0:
                raise serializers.ValidationError({'duration': ["Duration must be positive"]})
            if start is None:
                # Undated manual entries count towards today
                start = local_day_bounds(day or timezone.localdate())[0]
            if end is None:
                end = start + timedelta(seconds=duration)
        else:
            if start is None:
                raise serializers.ValidationError({'startTime': ["Start time is required"]})
            if end is None:
                end = timezone.now()
            if duration is None:
                duration = max(int((end - start).total_seconds()), 0)

        if start is not None and end is not None and end < start:
            raise serializers.ValidationError({'endTime': ["End time must be after the start time"]})

        attrs.update(start_time=start, end_time=end, duration=duration)
        return attrs


class TimerTaskSerializer(serializers.ModelSerializer):
    projectId = serializers.IntegerField(source='project_id', read_only=True)

    class Meta:
        model = Task
        fields = ('id', 'title', 'projectId')


class ActiveTimerSerializer(serializers.ModelSerializer):
    taskId = serializers.IntegerField(source='task_id', read_only=True)
    task = TimerTaskSerializer(read_only=True)
    startTime = serializers.DateTimeField(source='start_time', read_only=True)
    elapsedSeconds = serializers.SerializerMethodField()

    class Meta:
        model = ActiveTimer
        fields = ('id', 'taskId', 'task', 'description', 'startTime', 'elapsedSeconds')

    def get_elapsedSeconds(self, obj):
        return obj.elapsed_seconds()


class StartTimerSerializer(serializers.Serializer):
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
