import logging

from django.db.models import Count, Prefetch
from django_filters import rest_framework as filters
from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.decorators import action
from rest_framework.response import Response

from pms.exceptions import BadRequest
from project.models import Project
from task.models import Comment, Status, Priority, Task
from time_tracking.models import TimeEntry
from utils.access import WORKSPACE, accessible, require_role
from utils.custom_paginator import CustomPaginator
from workspace.models import WorkspaceMember
from ..serializers.task_serializer import (
    CommentSerializer,
    TaskDetailSerializer,
    TaskSerializer,
    TaskWriteSerializer,
)

logger = logging.getLogger(__name__)


class TaskFilter(filters.FilterSet):
    projectId = filters.NumberFilter(field_name='project_id')
    assigneeId = filters.NumberFilter(field_name='assignee_id')
    status = filters.ChoiceFilter(choices=Status.choices)
    priority = filters.ChoiceFilter(choices=Priority.choices)

    class Meta:
        model = Task
        fields = ['projectId', 'assigneeId', 'status', 'priority']


def ensure_workspace_member(user, workspace_id):
    """An assignee must belong to the workspace that owns the task."""
    if user is not None and not WorkspaceMember.objects.filter(workspace_id=workspace_id, user=user).exists():
        raise BadRequest("The assigned user is not a member of the workspace")


class TaskViewSet(viewsets.ModelViewSet):
    """
    Tasks visible through the caller's workspace memberships.

    Status changes are not constrained: any value of the status enum is
    accepted on update, and concurrent updates are last-write-wins.
    """
    serializer_class = TaskSerializer
    pagination_class = CustomPaginator
    filter_backends = [filters.DjangoFilterBackend]
    filterset_class = TaskFilter
    http_method_names = ['get', 'post', 'patch', 'delete', 'head', 'options']
    lookup_value_regex = r'\d+'

    def get_queryset(self):
        qs = (
            accessible(self.request.user, 'task', via=WORKSPACE)
            .select_related('project', 'created_by__profile', 'assignee__profile')
            .annotate(
                comment_count=Count('comments', distinct=True),
                time_entry_count=Count('time_entries', distinct=True),
            )
            .order_by('-created_at')
        )
        if self.action == 'retrieve':
            qs = qs.prefetch_related(
                Prefetch('comments', queryset=Comment.objects.select_related('author__profile').order_by('-created_at')),
                Prefetch('time_entries', queryset=TimeEntry.objects.select_related('user__profile').order_by('-start_time')),
            )
        return qs

    def get_serializer_class(self):
        if self.action in ('create', 'update', 'partial_update'):
            return TaskWriteSerializer
        if self.action == 'retrieve':
            return TaskDetailSerializer
        return TaskSerializer

    def _read(self, instance, serializer_class=TaskSerializer):
        return serializer_class(self.get_queryset().get(pk=instance.pk)).data

    @extend_schema(request=TaskWriteSerializer, responses={201: TaskSerializer})
    def create(self, request, *args, **kwargs):
        write_serializer = self.get_serializer(data=request.data)
        write_serializer.is_valid(raise_exception=True)

        project_id = write_serializer.validated_data['project_id']
        # Unknown and foreign projects both answer 403
        require_role(
            request.user, 'project', project_id, via=WORKSPACE,
            message="You don't have access to this project",
        )
        project = Project.objects.get(pk=project_id)
        ensure_workspace_member(write_serializer.validated_data.get('assignee'), project.workspace_id)

        instance = write_serializer.save(created_by=request.user)
        logger.info(f"User {request.user.id} created task {instance.id} in project {project.id}")
        return Response(self._read(instance), status=status.HTTP_201_CREATED)

    @extend_schema(request=TaskWriteSerializer, responses={200: TaskSerializer})
    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        instance = self.get_object()

        write_serializer = self.get_serializer(instance, data=request.data, partial=partial)
        write_serializer.is_valid(raise_exception=True)

        if 'assignee' in write_serializer.validated_data:
            ensure_workspace_member(write_serializer.validated_data['assignee'], instance.project.workspace_id)

        instance = write_serializer.save()
        return Response(self._read(instance))

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        logger.info(f"User {request.user.id} deleted task {instance.id}")
        instance.delete()
        return Response({'message': 'Task deleted successfully'})

    @extend_schema(request=CommentSerializer, responses={200: CommentSerializer(many=True), 201: CommentSerializer})
    @action(detail=True, methods=['get', 'post'], url_path='comments')
    def comments(self, request, pk=None):
        task = self.get_object()

        if request.method == 'POST':
            serializer = CommentSerializer(data=request.data)
            serializer.is_valid(raise_exception=True)
            comment = serializer.save(task=task, author=request.user)
            return Response(CommentSerializer(comment).data, status=status.HTTP_201_CREATED)

        comments = task.comments.select_related('author__profile').order_by('-created_at')
        return Response(CommentSerializer(comments, many=True).data)
