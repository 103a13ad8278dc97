from django.db import models
from django.contrib.auth.models import User
from django.utils import timezone


class TimeEntry(models.Model):
    """Time spent on a task. ``duration`` is always stored in seconds."""
    task = models.ForeignKey('task.Task', on_delete=models.CASCADE, related_name='time_entries')
    user = models.ForeignKey(User, on_delete=models.CASCADE, related_name='time_entries')
    description = models.TextField(null=True, blank=True)
    duration = models.PositiveIntegerField(help_text='Seconds')
    start_time = models.DateTimeField(null=True, blank=True)
    end_time = models.DateTimeField(null=True, blank=True)
    is_manual = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return f"{self.user} - {self.task} ({self.duration}s)"

    class Meta:
        verbose_name_plural = "Time Entries"
        ordering = ['-start_time', '-created_at']


class ActiveTimer(models.Model):
    """The single running stopwatch of a user."""
    user = models.OneToOneField(User, on_delete=models.CASCADE, related_name='active_timer')
    task = models.ForeignKey('task.Task', on_delete=models.CASCADE, related_name='active_timers')
    description = models.TextField(null=True, blank=True)
    start_time = models.DateTimeField(default=timezone.now)

    def elapsed_seconds(self, now=None):
        now = now or timezone.now()
        return max(int((now - self.start_time).total_seconds()), 0)

    def __str__(self):
        return f"{self.user} on {self.task} since {self.start_time:%Y-%m-%d %H:%M}"
