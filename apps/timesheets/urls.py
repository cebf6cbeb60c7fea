from django.urls import path
from . import views

urlpatterns = [
    path('', views.timesheet_collection_view, name='timesheet_list'),
    path('export/', views.timesheet_export_view, name='timesheet_export'),
    path('<int:pk>/submit/', views.timesheet_submit_view, name='timesheet_submit'),
    path('<int:pk>/approve/', views.timesheet_approve_view, name='timesheet_approve'),
    path('<int:pk>/reject/', views.timesheet_reject_view, name='timesheet_reject'),
]
