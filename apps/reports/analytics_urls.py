# apps/reports/analytics_urls.py
from django.urls import path
from . import views

urlpatterns = [
    path('projects/', views.project_progress_view, name='analytics_projects'),
    path('tasks/', views.task_completion_view, name='analytics_tasks'),
    path('time/', views.time_utilization_view, name='analytics_time'),
    path('overdue/', views.overdue_stats_view, name='analytics_overdue'),
]
