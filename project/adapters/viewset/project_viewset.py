import logging

from django.db.models import Count, OuterRef, Q, Subquery
from django_filters import rest_framework as filters
from drf_spectacular.utils import extend_schema
from rest_framework import status, viewsets
from rest_framework.response import Response

from project.models import Project, ProjectMember
from task.models import Status
from utils.access import PROJECT, WORKSPACE, accessible, require_role
from utils.custom_paginator import CustomPaginator
from project.adapters.serializers.project_serializer import ProjectSerializer, ProjectWriteSerializer

logger = logging.getLogger(__name__)


class ProjectFilter(filters.FilterSet):
    workspaceId = filters.NumberFilter(field_name='workspace_id')
    status = filters.CharFilter(field_name='status')

    class Meta:
        model = Project
        fields = ['workspaceId', 'status']


class ProjectViewSet(viewsets.ModelViewSet):
    """
    Projects API with:
    - project-membership scoping in get_queryset()
    - workspace-membership check on create
    - read/write serializer switching
    - per-user role and task counts annotated on every row
    """
    serializer_class = ProjectSerializer
    pagination_class = CustomPaginator
    filter_backends = [filters.DjangoFilterBackend]
    filterset_class = ProjectFilter
    http_method_names = ['get', 'post', 'patch', 'delete', 'head', 'options']
    lookup_value_regex = r'\d+'

    def get_queryset(self):
        user = self.request.user
        own_role = ProjectMember.objects.filter(project=OuterRef('pk'), user=user).values('role')[:1]

        return (
            accessible(user, 'project', via=PROJECT)
            .select_related('workspace')
            .annotate(
                user_role=Subquery(own_role),
                task_count=Count('tasks', distinct=True),
                completed_task_count=Count('tasks', filter=Q(tasks__status=Status.DONE), distinct=True),
            )
            .order_by('-created_at')
        )

    def get_serializer_class(self):
        if self.action in ('create', 'update', 'partial_update'):
            return ProjectWriteSerializer
        return ProjectSerializer

    @extend_schema(request=ProjectWriteSerializer, responses={201: ProjectSerializer})
    def create(self, request, *args, **kwargs):
        write_serializer = self.get_serializer(data=request.data)
        write_serializer.is_valid(raise_exception=True)

        workspace_id = write_serializer.validated_data['workspace_id']
        # Unknown and foreign workspaces both answer 403
        require_role(
            request.user, 'workspace', workspace_id, via=WORKSPACE,
            message="You don't have access to this workspace",
        )
        instance = write_serializer.save()
        logger.info(f"User {request.user.id} created project {instance.id} in workspace {workspace_id}")

        # Use read serializer for response to include role and counts
        read_serializer = ProjectSerializer(self.get_queryset().get(pk=instance.pk))
        headers = self.get_success_headers(read_serializer.data)
        return Response(read_serializer.data, status=status.HTTP_201_CREATED, headers=headers)

    @extend_schema(request=ProjectWriteSerializer, responses={200: ProjectSerializer})
    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        instance = self.get_object()

        write_serializer = self.get_serializer(instance, data=request.data, partial=partial)
        write_serializer.is_valid(raise_exception=True)
        instance = write_serializer.save()

        read_serializer = ProjectSerializer(self.get_queryset().get(pk=instance.pk))
        return Response(read_serializer.data)

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()
        logger.info(f"User {request.user.id} deleted project {instance.id}")
        instance.delete()
        return Response({'message': 'Project deleted successfully'})
