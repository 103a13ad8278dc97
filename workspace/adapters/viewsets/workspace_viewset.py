import logging

from django.contrib.auth.models import User
from django.db.models import Case, Count, IntegerField, Value, When
from drf_spectacular.utils import extend_schema
from rest_framework import mixins, status, viewsets
from rest_framework.decorators import action
from rest_framework.exceptions import NotFound
from rest_framework.response import Response

from pms.exceptions import Conflict
from utils.access import WORKSPACE, accessible, membership_of, require_role
from workspace.models import MANAGER_ROLES, MemberRole, Workspace, WorkspaceMember
from ..serializers.workspace_serializer import (
    InviteMemberSerializer,
    WorkspaceMemberSerializer,
    WorkspaceSerializer,
)

logger = logging.getLogger(__name__)

# OWNER first, then ADMIN, then MEMBER
ROLE_ORDER = Case(
    When(role=MemberRole.OWNER, then=Value(0)),
    When(role=MemberRole.ADMIN, then=Value(1)),
    default=Value(2),
    output_field=IntegerField(),
)


class WorkspaceViewSet(mixins.ListModelMixin,
                       mixins.CreateModelMixin,
                       viewsets.GenericViewSet):
    """
    Workspaces of the authenticated user.

    The caller becomes OWNER of every workspace it creates.
    """
    serializer_class = WorkspaceSerializer
    pagination_class = None

    def get_queryset(self):
        return (
            Workspace.objects.filter(pk__in=accessible(self.request.user, 'workspace').values('pk'))
            .annotate(
                member_count=Count('members', distinct=True),
                project_count=Count('projects', distinct=True),
            )
            .order_by('-created_at')
        )

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        workspace = serializer.save()
        logger.info(f"User {request.user.id} created workspace {workspace.id}")

        instance = self.get_queryset().get(pk=workspace.pk)
        return Response(self.get_serializer(instance).data, status=status.HTTP_201_CREATED)

    def _resolve_workspace_id(self, pk):
        if pk == 'current':
            membership = (
                WorkspaceMember.objects.filter(user=self.request.user)
                .order_by('joined_at', 'id')
                .first()
            )
            if membership is None:
                raise NotFound("Workspace not found")
            return membership.workspace_id
        if not str(pk).isdigit():
            raise NotFound("Workspace not found")
        return int(pk)

    @extend_schema(responses={200: WorkspaceMemberSerializer(many=True)})
    @action(detail=True, methods=['get', 'post'], url_path='members')
    def members(self, request, pk=None):
        workspace_id = self._resolve_workspace_id(pk)
        if membership_of(request.user, WORKSPACE, workspace_id) is None:
            raise NotFound("Workspace not found")

        if request.method == 'POST':
            return self._invite(request, workspace_id)

        members = (
            WorkspaceMember.objects.filter(workspace_id=workspace_id)
            .select_related('user', 'user__profile')
            .order_by(ROLE_ORDER, 'joined_at')
        )
        return Response(WorkspaceMemberSerializer(members, many=True).data)

    def _invite(self, request, workspace_id):
        require_role(
            request.user, 'workspace', workspace_id, roles=MANAGER_ROLES,
            message="You don't have permission to invite users to this workspace",
        )
        serializer = InviteMemberSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        invitee = User.objects.filter(email__iexact=serializer.validated_data['email']).first()
        if invitee is None:
            raise NotFound("User with this email not found")
        if WorkspaceMember.objects.filter(workspace_id=workspace_id, user=invitee).exists():
            raise Conflict("User is already a member of this workspace")

        member = WorkspaceMember.objects.create(
            workspace_id=workspace_id,
            user=invitee,
            role=serializer.validated_data['role'],
        )
        logger.info(f"User {request.user.id} added user {invitee.id} to workspace {workspace_id}")
        return Response(WorkspaceMemberSerializer(member).data, status=status.HTTP_201_CREATED)

    def ensure_workspace(self, request):
        """Idempotently give the caller a workspace (POST /api/user/ensure-workspace)."""
        workspace, created = Workspace.objects.ensure_for_user(request.user)
        if created:
            logger.info(f"Provisioned personal workspace {workspace.id} for user {request.user.id}")
            message = "Workspace created successfully"
        else:
            message = "User already has a workspace"
        return Response({
            'message': message,
            'workspace': WorkspaceSerializer(workspace).data,
        })
