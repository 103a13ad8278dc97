from django.db import models, transaction
from django.contrib.auth.models import User


class MeetingType(models.TextChoices):
    COMPANY = 'COMPANY', 'Company'
    TEAM = 'TEAM', 'Team'
    TUTORING = 'TUTORING', 'Tutoring'
    OTHER = 'OTHER', 'Other'


class MeetingLocation(models.TextChoices):
    REMOTE = 'REMOTE', 'Remote'
    IN_PERSON = 'IN_PERSON', 'In Person'


class MeetingQuerySet(models.QuerySet):

    def create_with_attendees(self, attendees=(), **fields):
        with transaction.atomic():
            meeting = self.create(**fields)
            MeetingAttendee.objects.bulk_create(
                MeetingAttendee(meeting=meeting, user=user) for user in attendees
            )
        return meeting


class Meeting(models.Model):
    project = models.ForeignKey('project.Project', on_delete=models.CASCADE, related_name='meetings')
    created_by = models.ForeignKey(User, on_delete=models.CASCADE, related_name='created_meetings')
    name = models.CharField(max_length=255)
    description = models.TextField(null=True, blank=True)
    date = models.DateTimeField()
    duration = models.PositiveIntegerField(help_text='Minutes')
    type = models.CharField(max_length=20, choices=MeetingType.choices)
    location = models.CharField(max_length=20, choices=MeetingLocation.choices)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = MeetingQuerySet.as_manager()

    def __str__(self):
        return self.name

    class Meta:
        ordering = ['-date']


class MeetingAttendee(models.Model):
    meeting = models.ForeignKey(Meeting, on_delete=models.CASCADE, related_name='attendees')
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='meeting_attendances')

    class Meta:
        unique_together = ('meeting', 'user')
