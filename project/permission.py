from rest_framework.permissions import BasePermission, SAFE_METHODS

from utils.access import PROJECT, membership_of
from workspace.models import MANAGER_ROLES


class ProjectManagerPermission(BasePermission):
    """
    Project membership endpoints, keyed by the ``pk`` URL kwarg.

    - read: any member of the project
    - write (invite/remove): OWNER or ADMIN of the project
    """
    message = "You are not a member of this project"

    def has_permission(self, request, view):
        user = getattr(request, "user", None)
        if not user or user.is_anonymous:
            return False

        member = membership_of(user, PROJECT, view.kwargs.get("pk"))
        if member is None:
            return False

        if request.method in SAFE_METHODS:
            return True

        if member.role not in MANAGER_ROLES:
            self.message = "You don't have permission to manage members of this project"
            return False
        return True
