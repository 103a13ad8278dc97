from django.db import models
from django.contrib.auth.models import User


class SystemRole(models.TextChoices):
    ADMIN = 'ADMIN', 'Admin'
    MEMBER = 'MEMBER', 'Member'


class UserProfile(models.Model):
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name='profile')
    name = models.CharField(max_length=255)
    role = models.CharField(max_length=20, choices=SystemRole.choices, default=SystemRole.MEMBER)
    avatar = models.ImageField(upload_to='avatars/', null=True, blank=True)

    def __str__(self):
        return self.name or self.user.email


def display_name(user):
    """Name shown for ``user``: profile name, then first name, then email."""
    profile = getattr(user, 'profile', None)
    if profile is not None and profile.name:
        return profile.name
    return user.first_name or user.email
