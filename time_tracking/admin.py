from django.contrib import admin

from .models import ActiveTimer, TimeEntry


@admin.register(TimeEntry)
class TimeEntryAdmin(admin.ModelAdmin):
    list_display = ('task', 'user', 'duration', 'start_time', 'end_time', 'is_manual')
    list_filter = ('is_manual',)
    search_fields = ('task__title', 'user__email', 'description')


@admin.register(ActiveTimer)
class ActiveTimerAdmin(admin.ModelAdmin):
    list_display = ('user', 'task', 'start_time')
