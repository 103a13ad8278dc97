from rest_framework import serializers

from project.models import Project, ProjectMember, ProjectStatus
from user.adapters.serializers.user_serializers import UserSummarySerializer
from workspace.adapters.serializers.workspace_serializer import validate_hex_color
from workspace.models import Workspace


class ProjectWorkspaceSerializer(serializers.ModelSerializer):
    class Meta:
        model = Workspace
        fields = ('id', 'name')


class ProjectSerializer(serializers.ModelSerializer):
    workspaceId = serializers.IntegerField(source='workspace_id', read_only=True)
    workspace = ProjectWorkspaceSerializer(read_only=True)
    startDate = serializers.DateTimeField(source='start_date', read_only=True)
    endDate = serializers.DateTimeField(source='end_date', read_only=True)
    userRole = serializers.CharField(source='user_role', read_only=True)
    taskCount = serializers.IntegerField(source='task_count', read_only=True)
    completedTaskCount = serializers.IntegerField(source='completed_task_count', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Project
        fields = (
            'id', 'name', 'description', 'color', 'status', 'startDate', 'endDate',
            'workspaceId', 'workspace', 'userRole', 'taskCount', 'completedTaskCount',
            'createdAt', 'updatedAt',
        )


class ProjectWriteSerializer(serializers.ModelSerializer):
    workspaceId = serializers.IntegerField(source='workspace_id', min_value=1)
    color = serializers.CharField(required=False, validators=[validate_hex_color])
    status = serializers.ChoiceField(choices=ProjectStatus.choices, required=False)
    startDate = serializers.DateTimeField(source='start_date', required=False, allow_null=True)
    endDate = serializers.DateTimeField(source='end_date', required=False, allow_null=True)

    class Meta:
        model = Project
        fields = ('name', 'description', 'color', 'status', 'workspaceId', 'startDate', 'endDate')
        extra_kwargs = {
            'name': {'min_length': 1},
        }

    def get_fields(self):
        fields = super().get_fields()
        if self.instance is not None:
            # A project never moves between workspaces
            fields['workspaceId'].read_only = True
        return fields

    def validate(self, attrs):
        start = attrs.get('start_date', getattr(self.instance, 'start_date', None))
        end = attrs.get('end_date', getattr(self.instance, 'end_date', None))
        if start and end and end < start:
            raise serializers.ValidationError({'endDate': ["End date must be after the start date"]})
        return attrs

    def create(self, validated_data):
        return Project.objects.create_for_owner(self.context['request'].user, **validated_data)


class ProjectMemberSerializer(serializers.ModelSerializer):
    projectId = serializers.IntegerField(source='project_id', read_only=True)
    userId = serializers.IntegerField(source='user_id', read_only=True)
    invitedBy = serializers.IntegerField(source='invited_by_id', read_only=True)
    joinedAt = serializers.DateTimeField(source='joined_at', read_only=True)
    user = UserSummarySerializer(read_only=True)

    class Meta:
        model = ProjectMember
        fields = ('id', 'projectId', 'userId', 'role', 'invitedBy', 'joinedAt', 'user')
