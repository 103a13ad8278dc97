from django.conf import settings
from django.db import models, transaction
from django.contrib.auth.models import User

from user.models import display_name


class MemberRole(models.TextChoices):
    OWNER = 'OWNER', 'Owner'
    ADMIN = 'ADMIN', 'Admin'
    MEMBER = 'MEMBER', 'Member'


MANAGER_ROLES = (MemberRole.OWNER, MemberRole.ADMIN)


class WorkspaceQuerySet(models.QuerySet):

    def create_for_owner(self, user, **fields):
        """Create a workspace together with its OWNER membership."""
        fields.setdefault('color', settings.DEFAULT_COLOR)
        with transaction.atomic():
            workspace = self.create(**fields)
            WorkspaceMember.objects.create(workspace=workspace, user=user, role=MemberRole.OWNER)
        return workspace

    def ensure_for_user(self, user):
        """
        Return the user's oldest workspace, provisioning a personal one if the
        user has none. The boolean tells whether a workspace was created.
        """
        membership = (
            WorkspaceMember.objects.select_related('workspace')
            .filter(user=user)
            .order_by('joined_at', 'id')
            .first()
        )
        if membership:
            return membership.workspace, False

        workspace = self.create_for_owner(
            user,
            name=f"{display_name(user)}'s Workspace",
            description='Your personal workspace',
        )
        return workspace, True


class Workspace(models.Model):
    name = models.CharField(max_length=255)
    description = models.TextField(null=True, blank=True)
    color = models.CharField(max_length=7, default='#7B68EE')
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = WorkspaceQuerySet.as_manager()

    def __str__(self):
        return self.name

    class Meta:
        ordering = ['-created_at']


class WorkspaceMember(models.Model):
    workspace = models.ForeignKey(Workspace, on_delete=models.CASCADE, related_name='members')
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='workspace_memberships')
    role = models.CharField(max_length=20, choices=MemberRole.choices, default=MemberRole.MEMBER)
    joined_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.user} - {self.workspace} ({self.role})"

    class Meta:
        unique_together = ('workspace', 'user')
