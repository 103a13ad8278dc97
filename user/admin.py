from django.contrib import admin

from .models import UserProfile


@admin.register(UserProfile)
class UserProfileAdmin(admin.ModelAdmin):
    list_display = ('name', 'user', 'role')
    list_filter = ('role',)
    search_fields = ('name', 'user__email')
