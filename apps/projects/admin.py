from django.contrib import admin
from .models import Project


@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ('title', 'key', 'status', 'priority', 'manager', 'organization', 'created_at')
    list_filter = ('status', 'priority', 'organization')
    search_fields = ('title', 'key')
    filter_horizontal = ('members',)
