from django.contrib.auth.models import User
from rest_framework import serializers

from project.models import Project
from task.models import Comment, Priority, Status, Task
from time_tracking.adapters.serializers.time_entry_serializer import TimeEntrySerializer
from user.adapters.serializers.user_serializers import UserSummarySerializer


class TaskProjectSerializer(serializers.ModelSerializer):
    workspaceId = serializers.IntegerField(source='workspace_id', read_only=True)

    class Meta:
        model = Project
        fields = ['id', 'name', 'color', 'workspaceId']


class CommentSerializer(serializers.ModelSerializer):
    taskId = serializers.IntegerField(source='task_id', read_only=True)
    author = UserSummarySerializer(read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Comment
        fields = ('id', 'taskId', 'content', 'author', 'createdAt', 'updatedAt')
        extra_kwargs = {
            'content': {'min_length': 1, 'max_length': 1000},
        }


class TaskSerializer(serializers.ModelSerializer):
    projectId = serializers.IntegerField(source='project_id', read_only=True)
    project = TaskProjectSerializer(read_only=True)
    createdBy = UserSummarySerializer(source='created_by', read_only=True)
    assigneeId = serializers.IntegerField(source='assignee_id', read_only=True)
    assignee = UserSummarySerializer(read_only=True)
    startDate = serializers.DateTimeField(source='start_date', read_only=True)
    dueDate = serializers.DateTimeField(source='due_date', read_only=True)
    commentCount = serializers.IntegerField(source='comment_count', read_only=True)
    timeEntryCount = serializers.IntegerField(source='time_entry_count', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Task
        fields = (
            'id', 'title', 'description', 'status', 'priority', 'startDate', 'dueDate',
            'projectId', 'project', 'createdBy', 'assigneeId', 'assignee',
            'commentCount', 'timeEntryCount', 'createdAt', 'updatedAt',
        )


class TaskDetailSerializer(TaskSerializer):
    comments = CommentSerializer(many=True, read_only=True)
    timeEntries = TimeEntrySerializer(source='time_entries', many=True, read_only=True)

    class Meta(TaskSerializer.Meta):
        fields = TaskSerializer.Meta.fields + ('comments', 'timeEntries')


class TaskWriteSerializer(serializers.ModelSerializer):
    projectId = serializers.IntegerField(source='project_id', min_value=1)
    assigneeId = serializers.PrimaryKeyRelatedField(
        source='assignee', queryset=User.objects.all(), required=False, allow_null=True,
    )
    status = serializers.ChoiceField(choices=Status.choices, required=False)
    priority = serializers.ChoiceField(choices=Priority.choices, required=False)
    startDate = serializers.DateTimeField(source='start_date', required=False, allow_null=True)
    dueDate = serializers.DateTimeField(source='due_date', required=False, allow_null=True)

    class Meta:
        model = Task
        fields = ('title', 'description', 'projectId', 'assigneeId', 'status', 'priority', 'startDate', 'dueDate')
        extra_kwargs = {
            'title': {'min_length': 1},
        }

    def get_fields(self):
        fields = super().get_fields()
        if self.instance is not None:
            # Tasks stay in the project they were created in
            fields['projectId'].read_only = True
        return fields
