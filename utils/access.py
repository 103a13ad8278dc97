"""
Membership-scoped access checks shared by every API view.

Each resource type knows the path from its rows to the membership table that
authorises it (``via`` the workspace or the project).  Views ask one question,
"which rows of this resource may this user act on", instead of repeating the
membership joins themselves.
"""
from django.apps import apps
from django.db.models import Q
from rest_framework.exceptions import NotFound, PermissionDenied

WORKSPACE = 'workspace'
PROJECT = 'project'


class Resource:

    def __init__(self, model, paths, default_via, owner_field=None):
        self.model_label = model
        self.paths = paths
        self.default_via = default_via
        self.owner_field = owner_field

    @property
    def model(self):
        return apps.get_model(self.model_label)

    def membership_path(self, via=None):
        via = via or self.default_via
        try:
            return self.paths[via]
        except KeyError:
            raise ValueError(f"{self.model_label} cannot be scoped via {via}")


RESOURCES = {
    'workspace': Resource('workspace.Workspace', {WORKSPACE: 'members'}, WORKSPACE),
    'project': Resource(
        'project.Project',
        {WORKSPACE: 'workspace__members', PROJECT: 'members'},
        PROJECT,
    ),
    'task': Resource(
        'task.Task',
        {WORKSPACE: 'project__workspace__members', PROJECT: 'project__members'},
        WORKSPACE,
        owner_field='created_by',
    ),
    'comment': Resource(
        'task.Comment',
        {WORKSPACE: 'task__project__workspace__members'},
        WORKSPACE,
        owner_field='author',
    ),
    'time_entry': Resource(
        'time_tracking.TimeEntry',
        {WORKSPACE: 'task__project__workspace__members'},
        WORKSPACE,
        owner_field='user',
    ),
    'meeting': Resource(
        'meeting.Meeting',
        {PROJECT: 'project__members'},
        PROJECT,
        owner_field='created_by',
    ),
}


def accessible(user, resource, roles=None, via=None, or_owner=False):
    """
    Rows of ``resource`` that ``user`` may act on.

    Args:
        user: the authenticated user
        resource: key of ``RESOURCES`` ('task', 'comment', ...)
        roles: if given, the membership must carry one of these roles
        via: WORKSPACE or PROJECT membership; defaults per resource
        or_owner: also allow rows the user authored, whatever the role

    Returns:
        A queryset of the resource model.
    """
    spec = RESOURCES[resource]
    path = spec.membership_path(via)

    condition = Q(**{f'{path}__user': user})
    if roles:
        condition &= Q(**{f'{path}__role__in': list(roles)})
    if or_owner:
        if spec.owner_field is None:
            raise ValueError(f"{spec.model_label} has no owner field")
        condition |= Q(**{spec.owner_field: user})

    return spec.model.objects.filter(condition).distinct()


def can_act(user, resource, pk, roles=None, via=None, or_owner=False):
    return accessible(user, resource, roles=roles, via=via, or_owner=or_owner).filter(pk=pk).exists()


def get_accessible_or_404(user, resource, pk, roles=None, via=None, or_owner=False, queryset=None, message=None):
    """
    Fetch one row the user may act on. Missing rows and rows outside the
    user's memberships both raise ``NotFound``.
    """
    qs = accessible(user, resource, roles=roles, via=via, or_owner=or_owner)
    if queryset is not None:
        qs = queryset.filter(pk__in=qs.values('pk'))
    obj = qs.filter(pk=pk).first()
    if obj is None:
        raise NotFound(message or f"{RESOURCES[resource].model._meta.verbose_name.capitalize()} not found")
    return obj


def require_role(user, resource, pk, roles=None, via=None, message=None):
    """Raise ``PermissionDenied`` unless the user holds a qualifying membership."""
    if not can_act(user, resource, pk, roles=roles, via=via):
        raise PermissionDenied(message or "You don't have access to this resource")


def membership_of(user, scope, pk):
    """The user's WorkspaceMember / ProjectMember row for the given scope, or None."""
    if scope == WORKSPACE:
        model = apps.get_model('workspace.WorkspaceMember')
        return model.objects.filter(workspace_id=pk, user=user).first()
    model = apps.get_model('project.ProjectMember')
    return model.objects.filter(project_id=pk, user=user).first()
