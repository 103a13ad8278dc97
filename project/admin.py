from django.contrib import admin
from django_summernote.admin import SummernoteModelAdmin

from project.models import Project, ProjectMember


class ProjectMemberInline(admin.TabularInline):
    model = ProjectMember
    fk_name = 'project'
    extra = 1


@admin.register(Project)
class ProjectAdmin(SummernoteModelAdmin):
    list_display = ('name', 'workspace', 'status', 'start_date', 'end_date', 'created_at', 'updated_at')
    search_fields = ('name', 'description')
    list_filter = ('status', 'workspace')
    inlines = [ProjectMemberInline]
    summernote_fields = ('description',)


@admin.register(ProjectMember)
class ProjectMemberAdmin(admin.ModelAdmin):
    list_display = ('project', 'user', 'role', 'joined_at')
    list_filter = ('role',)
    search_fields = ('project__name', 'user__email')
