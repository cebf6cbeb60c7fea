from django.contrib import admin
from .models import ProjectFile


@admin.register(ProjectFile)
class ProjectFileAdmin(admin.ModelAdmin):
    list_display = ('name', 'project', 'uploaded_by', 'size', 'type', 'created_at')
    search_fields = ('name',)
