from django.contrib import admin
from .models import Timesheet


@admin.register(Timesheet)
class TimesheetAdmin(admin.ModelAdmin):
    list_display = ('user', 'project', 'task', 'date', 'hours', 'status', 'billable')
    list_filter = ('status', 'billable')
    date_hierarchy = 'date'
