import logging

from django.contrib.auth.models import User
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.exceptions import NotFound, ValidationError
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from pms.exceptions import Conflict
from project.models import ProjectMember
from project.permission import ProjectManagerPermission
from workspace.adapters.serializers.workspace_serializer import InviteMemberSerializer
from workspace.models import MemberRole
from project.adapters.serializers.project_serializer import ProjectMemberSerializer

logger = logging.getLogger(__name__)


class ProjectMemberViewSet(viewsets.ViewSet):
    """
    Members of one project: list for members, invite/remove for OWNER/ADMIN.
    """
    permission_classes = [IsAuthenticated, ProjectManagerPermission]

    @extend_schema(responses={200: ProjectMemberSerializer(many=True)})
    def list(self, request, pk=None):
        members = (
            ProjectMember.objects.filter(project_id=pk)
            .select_related('user', 'user__profile')
            .order_by('joined_at', 'id')
        )
        return Response(ProjectMemberSerializer(members, many=True).data)

    @extend_schema(request=InviteMemberSerializer, responses={201: ProjectMemberSerializer})
    def create(self, request, pk=None):
        serializer = InviteMemberSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        invitee = User.objects.filter(email__iexact=serializer.validated_data['email']).first()
        if invitee is None:
            raise NotFound("User with this email not found")

        if ProjectMember.objects.filter(project_id=pk, user=invitee).exists():
            raise Conflict("User is already a member of this project")

        member = ProjectMember.objects.create(
            project_id=pk,
            user=invitee,
            role=serializer.validated_data['role'],
            invited_by=request.user,
        )
        logger.info(f"User {request.user.id} invited user {invitee.id} to project {pk} as {member.role}")
        return Response(ProjectMemberSerializer(member).data, status=status.HTTP_201_CREATED)

    @extend_schema(parameters=[OpenApiParameter('userId', int, required=True)])
    def remove(self, request, pk=None):
        user_id = request.query_params.get('userId')
        if not user_id:
            raise ValidationError({'userId': ["User ID is required"]})
        if not user_id.isdigit():
            raise ValidationError({'userId': ["A valid integer is required."]})

        member = ProjectMember.objects.filter(project_id=pk, user_id=int(user_id)).first()
        if member is None:
            raise NotFound("Member not found")

        if member.role == MemberRole.OWNER:
            raise Conflict("Cannot remove the project owner")

        member.delete()
        logger.info(f"User {request.user.id} removed user {user_id} from project {pk}")
        return Response({'success': True})
