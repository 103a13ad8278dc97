from django.contrib import admin
from django_summernote.admin import SummernoteModelAdmin

from .models import Meeting, MeetingAttendee


class MeetingAttendeeInline(admin.TabularInline):
    model = MeetingAttendee
    extra = 1


@admin.register(Meeting)
class MeetingAdmin(SummernoteModelAdmin):
    list_display = ('name', 'project', 'date', 'duration', 'type', 'location')
    list_filter = ('type', 'location', 'project')
    search_fields = ('name', 'description')
    summernote_fields = ('description',)
    inlines = [MeetingAttendeeInline]
