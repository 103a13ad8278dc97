from django.contrib import admin
from django_summernote.admin import SummernoteModelAdmin

from .models import Comment, Task


class CommentInline(admin.TabularInline):
    model = Comment
    extra = 0


@admin.register(Task)
class TaskAdmin(SummernoteModelAdmin):
    list_display = ('title', 'project', 'status', 'priority', 'assignee', 'due_date')
    list_filter = ('status', 'priority', 'project')
    search_fields = ('title', 'description')
    summernote_fields = ('description',)
    inlines = [CommentInline]


@admin.register(Comment)
class CommentAdmin(admin.ModelAdmin):
    list_display = ('task', 'author', 'created_at')
    search_fields = ('content', 'task__title')
