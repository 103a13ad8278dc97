from rest_framework import serializers

from meeting.models import Meeting, MeetingAttendee, MeetingLocation, MeetingType
from project.models import Project
from user.adapters.serializers.user_serializers import UserSummarySerializer


class MeetingProjectSerializer(serializers.ModelSerializer):
    class Meta:
        model = Project
        fields = ('id', 'name', 'color')


class MeetingAttendeeSerializer(serializers.ModelSerializer):
    userId = serializers.IntegerField(source='user_id', read_only=True)
    user = UserSummarySerializer(read_only=True)

    class Meta:
        model = MeetingAttendee
        fields = ('id', 'userId', 'user')


class MeetingSerializer(serializers.ModelSerializer):
    projectId = serializers.IntegerField(source='project_id', read_only=True)
    project = MeetingProjectSerializer(read_only=True)
    createdBy = UserSummarySerializer(source='created_by', read_only=True)
    attendees = MeetingAttendeeSerializer(many=True, read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = Meeting
        fields = (
            'id', 'name', 'description', 'date', 'duration', 'type', 'location',
            'projectId', 'project', 'createdBy', 'attendees', 'createdAt',
        )


class MeetingWriteSerializer(serializers.Serializer):
    name = serializers.CharField(min_length=1, max_length=255)
    description = serializers.CharField(required=False, allow_blank=True, allow_null=True)
    date = serializers.DateTimeField()
    duration = serializers.IntegerField(min_value=1, help_text='Minutes')
    type = serializers.ChoiceField(choices=MeetingType.choices)
    location = serializers.ChoiceField(choices=MeetingLocation.choices)
    projectId = serializers.IntegerField(min_value=1)
    attendeeIds = serializers.ListField(child=serializers.IntegerField(min_value=1), required=False, default=list)

    def validate_attendeeIds(self, value):
        return list(dict.fromkeys(value))


class ProjectMeetingsSerializer(serializers.ModelSerializer):
    workspaceId = serializers.IntegerField(source='workspace_id', read_only=True)
    meetings = MeetingSerializer(many=True, read_only=True)

    class Meta:
        model = Project
        fields = ('id', 'name', 'color', 'workspaceId', 'meetings')


class MeetingQuerySerializer(serializers.Serializer):
    projectId = serializers.IntegerField(required=False, min_value=1)
