# apps/reports/views.py
from django.views.decorators.http import require_http_methods

from apps.core.decorators import api_login_required, role_required
from apps.core.http import api_response
from apps.core.models import Role
from .domain.services import AnalyticsService, DashboardService


# --- Dashboardy (per rola) ---

@api_login_required
@require_http_methods(["GET"])
@role_required(Role.ADMIN)
def admin_dashboard_view(request):
    return api_response(DashboardService().admin_stats(request.user))


@api_login_required
@require_http_methods(["GET"])
@role_required(Role.ADMIN, Role.PROJECT_MANAGER, Role.TEAM_LEAD)
def pm_dashboard_view(request):
    return api_response(DashboardService().pm_stats(request.user))


@api_login_required
@require_http_methods(["GET"])
def member_dashboard_view(request):
    return api_response(DashboardService().member_stats(request.user))


# --- Analityka (organizacja) ---

@api_login_required
@require_http_methods(["GET"])
def project_progress_view(request):
    return api_response(AnalyticsService().project_progress(request.user))


@api_login_required
@require_http_methods(["GET"])
def task_completion_view(request):
    return api_response(AnalyticsService().task_completion(request.user))


@api_login_required
@require_http_methods(["GET"])
def time_utilization_view(request):
    return api_response(AnalyticsService().time_utilization(request.user))


@api_login_required
@require_http_methods(["GET"])
def overdue_stats_view(request):
    return api_response(AnalyticsService().overdue_vs_completed(request.user))
