import logging

from rest_framework import viewsets
from rest_framework.response import Response

from utils.access import get_accessible_or_404
from workspace.models import MANAGER_ROLES

logger = logging.getLogger(__name__)


class CommentViewSet(viewsets.ViewSet):
    """Comments are created and listed under their task; only deletion lives here."""

    def destroy(self, request, pk=None):
        # Author, or OWNER/ADMIN of the task's workspace; anyone else gets a 404
        comment = get_accessible_or_404(
            request.user, 'comment', pk,
            roles=MANAGER_ROLES, or_owner=True,
            message="Comment not found or access denied",
        )
        comment.delete()
        logger.info(f"User {request.user.id} deleted comment {pk}")
        return Response({'message': 'Comment deleted successfully'})
