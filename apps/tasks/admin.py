from django.contrib import admin
from .models import Task, TaskComment, TaskHistory


class TaskHistoryInline(admin.TabularInline):
    model = TaskHistory
    extra = 0
    readonly_fields = ('user', 'action', 'field', 'old_value', 'new_value', 'timestamp')
    can_delete = False


class TaskCommentInline(admin.TabularInline):
    model = TaskComment
    extra = 0
    fields = ('user', 'text', 'parent_comment')


@admin.register(Task)
class TaskAdmin(admin.ModelAdmin):
    list_display = ('title', 'project', 'status', 'priority', 'type', 'reporter', 'due_date')
    list_filter = ('status', 'priority', 'type')
    search_fields = ('title', 'description')
    filter_horizontal = ('assignees', 'dependencies')
    inlines = [TaskCommentInline, TaskHistoryInline]
