# apps/milestones/views.py
import logging

from django.shortcuts import get_object_or_404
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from apps.core.decorators import api_login_required, role_required
from apps.core.exceptions import Forbidden
from apps.core.forms import partial_form_data
from apps.core.http import api_list_response, api_response, read_json, validate_form
from apps.core.models import Role
from apps.projects.views import get_project_for
from apps.reports.models import ActivityLog
from apps.reports.services import ActivityLogger
from .forms import MILESTONE_FIELDS, MilestoneForm
from .models import Milestone
from .serializers import serialize_milestone

logger = logging.getLogger(__name__)


def get_milestone_for(user, pk):
    return get_object_or_404(
        Milestone.objects.select_related('project'),
        pk=pk,
        project__organization_id=user.organization_id
    )


@csrf_exempt
@api_login_required
@require_http_methods(["GET", "POST"])
def project_milestones_view(request, project_id):
    if request.method == "POST":
        return _create_milestone(request, project_id)

    project = get_project_for(request.user, project_id)
    milestones = Milestone.objects.filter(project=project)
    return api_list_response([serialize_milestone(m) for m in milestones])


@role_required(Role.ADMIN, Role.PROJECT_MANAGER, Role.TEAM_LEAD)
def _create_milestone(request, project_id):
    project = get_project_for(request.user, project_id)

    form = MilestoneForm(partial_form_data(Milestone(), read_json(request), MILESTONE_FIELDS))
    validate_form(form)

    milestone = form.save(commit=False)
    milestone.project = project
    milestone.save()

    ActivityLogger.log(request.user, milestone, ActivityLog.Action.CREATED, project=project)
    logger.info("Milestone %s created in project %s", milestone.id, project.id)
    return api_response(serialize_milestone(milestone), status=201)


@csrf_exempt
@api_login_required
@require_http_methods(["GET", "PUT", "DELETE"])
def milestone_detail_view(request, pk):
    if request.method == "PUT":
        return _update_milestone(request, pk)
    if request.method == "DELETE":
        return _delete_milestone(request, pk)

    milestone = get_milestone_for(request.user, pk)
    return api_response(serialize_milestone(milestone, project_title=milestone.project.title))


@role_required(Role.ADMIN, Role.PROJECT_MANAGER, Role.TEAM_LEAD)
def _update_milestone(request, pk):
    milestone = get_milestone_for(request.user, pk)

    form = MilestoneForm(
        partial_form_data(milestone, read_json(request), MILESTONE_FIELDS),
        instance=milestone
    )
    validate_form(form)
    milestone = form.save()

    ActivityLogger.log(
        request.user, milestone, ActivityLog.Action.UPDATED,
        project=milestone.project,
        details={'fields': form.changed_data}
    )

    return api_response(serialize_milestone(milestone))


@role_required(Role.ADMIN, Role.PROJECT_MANAGER)
def _delete_milestone(request, pk):
    user = request.user
    milestone = get_milestone_for(user, pk)

    # Admin usuwa dowolny, PM tylko w swoim projekcie
    if user.role != Role.ADMIN and not milestone.project.is_managed_by(user):
        raise Forbidden("Not authorized to delete this milestone")

    ActivityLogger.log(
        user, milestone, ActivityLog.Action.DELETED,
        project=milestone.project,
        details={'title': milestone.title}
    )
    milestone.delete()
    logger.info("Milestone %s deleted by user %s", pk, user.id)
    return api_response({})
