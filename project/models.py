from django.conf import settings
from django.db import models, transaction
from django.contrib.auth.models import User

from workspace.models import MemberRole, Workspace


class ProjectStatus(models.TextChoices):
    ACTIVE = 'ACTIVE', 'Active'
    ON_HOLD = 'ON_HOLD', 'On Hold'
    COMPLETED = 'COMPLETED', 'Completed'
    CANCELLED = 'CANCELLED', 'Cancelled'


class ProjectQuerySet(models.QuerySet):

    def create_for_owner(self, user, **fields):
        """Create a project and make ``user`` its OWNER in the same transaction."""
        fields.setdefault('color', settings.DEFAULT_COLOR)
        fields.setdefault('status', ProjectStatus.ACTIVE)
        with transaction.atomic():
            project = self.create(**fields)
            ProjectMember.objects.create(project=project, user=user, role=MemberRole.OWNER)
        return project


class Project(models.Model):
    workspace = models.ForeignKey(Workspace, on_delete=models.CASCADE, related_name='projects')
    name = models.CharField(max_length=255)
    description = models.TextField(null=True, blank=True)
    color = models.CharField(max_length=7, default='#7B68EE')
    status = models.CharField(max_length=20, choices=ProjectStatus.choices, default=ProjectStatus.ACTIVE)
    start_date = models.DateTimeField(null=True, blank=True)
    end_date = models.DateTimeField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ProjectQuerySet.as_manager()

    def __str__(self):
        return self.name

    class Meta:
        ordering = ['-created_at']


class ProjectMember(models.Model):
    project = models.ForeignKey(Project, on_delete=models.CASCADE, related_name='members')
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='project_memberships')
    role = models.CharField(max_length=20, choices=MemberRole.choices, default=MemberRole.MEMBER)
    invited_by = models.ForeignKey(User, on_delete=models.SET_NULL, null=True, blank=True, related_name='+')
    joined_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        unique_together = ('project', 'user')
        ordering = ['joined_at']
