# apps/reports/dashboard_urls.py
from django.urls import path
from . import views

urlpatterns = [
    path('admin/', views.admin_dashboard_view, name='dashboard_admin'),
    path('pm/', views.pm_dashboard_view, name='dashboard_pm'),
    path('member/', views.member_dashboard_view, name='dashboard_member'),
]
