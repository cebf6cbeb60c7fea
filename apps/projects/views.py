import logging

from django.shortcuts import get_object_or_404
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from apps.core.decorators import api_login_required, role_required
from apps.core.exceptions import Forbidden
from apps.core.forms import partial_form_data
from apps.core.http import api_list_response, api_response, read_json, validate_form
from apps.core.models import Role
from apps.notifications.models import Notification
from apps.notifications.services import NotificationService
from apps.reports.models import ActivityLog
from apps.reports.services import ActivityLogger
from .forms import PROJECT_FIELDS, ProjectForm
from .models import Project
from .serializers import serialize_project

logger = logging.getLogger(__name__)


def get_project_for(user, pk):
    """Projekt z organizacji użytkownika albo 404."""
    return get_object_or_404(
        Project.objects.select_related('manager'),
        pk=pk,
        organization_id=user.organization_id
    )


@csrf_exempt
@api_login_required
@require_http_methods(["GET", "POST"])
def project_collection_view(request):
    if request.method == "POST":
        return _create_project(request)

    projects = Project.objects.filter(
        organization_id=request.user.organization_id
    ).select_related('manager').prefetch_related('members')

    return api_list_response([serialize_project(p) for p in projects])


@csrf_exempt
@api_login_required
@require_http_methods(["GET", "PUT", "DELETE"])
def project_detail_view(request, pk):
    if request.method == "PUT":
        return _update_project(request, pk)
    if request.method == "DELETE":
        return _delete_project(request, pk)

    project = get_project_for(request.user, pk)
    return api_response(serialize_project(project, detail=True))


@role_required(Role.ADMIN, Role.PROJECT_MANAGER, Role.TEAM_LEAD)
def _create_project(request):
    user = request.user
    form = ProjectForm(
        partial_form_data(Project(), read_json(request), PROJECT_FIELDS),
        organization=user.organization_id
    )
    validate_form(form)

    project = form.save(commit=False)
    project.manager = user
    project.organization_id = user.organization_id
    project.save()
    form.save_m2m()

    service = NotificationService()
    link = f"/projects/{project.id}"

    # Potwierdzenie dla twórcy
    service.notify(
        user.id,
        Notification.Type.PROJECT_UPDATE,
        "Project Created",
        f'New project "{project.title}" has been successfully created.',
        sender_id=user.id,
        link=link,
    )

    for member in project.members.all():
        if member.id != user.id:
            service.notify(
                member.id,
                Notification.Type.PROJECT_UPDATE,
                "Added to Project",
                f"You have been added to the project: {project.title}",
                sender_id=user.id,
                link=link,
            )

    ActivityLogger.log(user, project, ActivityLog.Action.CREATED, project=project)
    logger.info("Project %s created by user %s", project.id, user.id)

    return api_response(serialize_project(project), status=201)


@role_required(Role.ADMIN, Role.PROJECT_MANAGER, Role.TEAM_LEAD)
def _update_project(request, pk):
    user = request.user
    project = get_project_for(user, pk)

    # Tylko manager projektu albo admin
    if not project.is_managed_by(user) and user.role != Role.ADMIN:
        raise Forbidden(f"User {user.id} is not authorized to update this project")

    payload = read_json(request)
    form = ProjectForm(
        partial_form_data(project, payload, PROJECT_FIELDS),
        instance=project,
        organization=user.organization_id
    )
    validate_form(form)
    project = form.save()

    ActivityLogger.log(
        user, project, ActivityLog.Action.UPDATED,
        project=project,
        details={'fields': sorted(k for k in payload if k in PROJECT_FIELDS)}
    )

    return api_response(serialize_project(project))


@role_required(Role.ADMIN, Role.PROJECT_MANAGER)
def _delete_project(request, pk):
    user = request.user
    project = get_project_for(user, pk)

    # PM nie może usuwać projektów
    if user.role != Role.ADMIN:
        raise Forbidden(
            f"User {user.id} is not authorized to delete this project. Only admins can delete projects."
        )

    ActivityLogger.log(user, project, ActivityLog.Action.DELETED, project=project, details={'title': project.title})

    # Brak kaskady: zadania, kamienie milowe, timesheety zostają osierocone
    project.delete()
    logger.info("Project %s deleted by user %s", pk, user.id)

    return api_response({})
