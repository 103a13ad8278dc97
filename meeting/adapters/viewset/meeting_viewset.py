import logging

from django.contrib.auth.models import User
from django.db.models import Prefetch
from drf_spectacular.utils import OpenApiParameter, extend_schema
from rest_framework import status, viewsets
from rest_framework.response import Response

from meeting.models import Meeting, MeetingAttendee
from pms.exceptions import BadRequest
from project.models import ProjectMember
from utils.access import PROJECT, accessible, require_role
from ..serializers.meeting_serializer import (
    MeetingQuerySerializer,
    MeetingSerializer,
    MeetingWriteSerializer,
    ProjectMeetingsSerializer,
)

logger = logging.getLogger(__name__)

NOT_A_MEMBER = "You are not a member of this project"


def meeting_queryset():
    return (
        Meeting.objects.select_related('project', 'created_by__profile')
        .prefetch_related(
            Prefetch('attendees', queryset=MeetingAttendee.objects.select_related('user__profile'))
        )
        .order_by('-date')
    )


class MeetingViewSet(viewsets.ViewSet):
    """Meetings are scoped by project membership."""

    @extend_schema(
        parameters=[OpenApiParameter('projectId', int)],
        responses={200: MeetingSerializer(many=True)},
    )
    def list(self, request):
        params = MeetingQuerySerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        project_id = params.validated_data.get('projectId')

        if project_id is not None:
            require_role(request.user, 'project', project_id, via=PROJECT, message=NOT_A_MEMBER)
            meetings = meeting_queryset().filter(project_id=project_id)
            return Response(MeetingSerializer(meetings, many=True).data)

        # Every project of the caller, each with its meetings
        projects = (
            accessible(request.user, 'project', via=PROJECT)
            .prefetch_related(Prefetch('meetings', queryset=meeting_queryset()))
            .order_by('name')
        )
        return Response(ProjectMeetingsSerializer(projects, many=True).data)

    @extend_schema(request=MeetingWriteSerializer, responses={201: MeetingSerializer})
    def create(self, request):
        serializer = MeetingWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        project_id = data['projectId']

        require_role(request.user, 'project', project_id, via=PROJECT, message=NOT_A_MEMBER)

        attendee_ids = data['attendeeIds']
        if attendee_ids:
            valid = ProjectMember.objects.filter(project_id=project_id, user_id__in=attendee_ids).count()
            if valid != len(attendee_ids):
                raise BadRequest("Some attendees are not members of this project")

        meeting = Meeting.objects.create_with_attendees(
            attendees=User.objects.filter(id__in=attendee_ids),
            project_id=project_id,
            created_by=request.user,
            name=data['name'],
            description=data.get('description'),
            date=data['date'],
            duration=data['duration'],
            type=data['type'],
            location=data['location'],
        )
        logger.info(f"User {request.user.id} created meeting {meeting.id} with {len(attendee_ids)} attendees")
        return Response(MeetingSerializer(meeting_queryset().get(pk=meeting.pk)).data, status=status.HTTP_201_CREATED)
