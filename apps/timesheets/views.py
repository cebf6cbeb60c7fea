# apps/timesheets/views.py
import csv
import logging
from datetime import date

from dateutil.parser import isoparse
from django.http import StreamingHttpResponse
from django.shortcuts import get_object_or_404
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from apps.core.decorators import api_login_required, role_required
from apps.core.exceptions import BadRequest, Forbidden, NotFound
from apps.core.forms import partial_form_data
from apps.core.http import api_list_response, api_response, read_json, validate_form
from apps.core.models import Role
from apps.projects.models import Project
from apps.reports.models import ActivityLog
from apps.reports.services import ActivityLogger
from apps.tasks.models import Task
from .forms import TIMESHEET_FIELDS, TimesheetForm
from .models import Timesheet
from .serializers import serialize_timesheet

logger = logging.getLogger(__name__)

CSV_HEADER = ['Date', 'Project', 'Task', 'Hours', 'Status', 'Description']


def _parse_date(value, name):
    try:
        return isoparse(value).date()
    except ValueError:
        raise BadRequest(f"Invalid '{name}' date: {value}")


def _related_maps(timesheets):
    """Projekty i zadania wpisów jednym zapytaniem na model (bez JOIN, bo mogą być osierocone)."""
    project_ids = {t.project_id for t in timesheets}
    task_ids = {t.task_id for t in timesheets if t.task_id}
    projects = Project.objects.in_bulk(project_ids)
    tasks = Task.objects.in_bulk(task_ids)
    return projects, tasks


def _own_timesheets(request):
    qs = Timesheet.objects.filter(user=request.user)

    date_from = request.GET.get('from')
    date_to = request.GET.get('to')
    if date_from:
        qs = qs.filter(date__gte=_parse_date(date_from, 'from'))
    if date_to:
        qs = qs.filter(date__lte=_parse_date(date_to, 'to'))
    return list(qs)


@csrf_exempt
@api_login_required
@require_http_methods(["GET", "POST"])
def timesheet_collection_view(request):
    if request.method == "POST":
        return _create_timesheet(request)

    timesheets = _own_timesheets(request)
    projects, tasks = _related_maps(timesheets)
    return api_list_response([serialize_timesheet(t, projects, tasks) for t in timesheets])


def _to_id(value, name):
    try:
        return int(value)
    except (TypeError, ValueError):
        raise BadRequest(f"Invalid {name} id")


def _create_timesheet(request):
    user = request.user
    payload = read_json(request)

    if not payload.get('project'):
        raise BadRequest("Please provide a project")
    project = Project.objects.filter(
        pk=_to_id(payload['project'], 'project'),
        organization_id=user.organization_id
    ).first()
    if project is None:
        raise NotFound("Project not found")

    task = None
    if payload.get('task'):
        task = Task.objects.filter(pk=_to_id(payload['task'], 'task')).first()
        if task is None:
            raise NotFound("Task not found")
        if task.project_id != project.id:
            raise BadRequest("Task does not belong to the selected project")

    form = TimesheetForm(partial_form_data(Timesheet(), payload, TIMESHEET_FIELDS))
    validate_form(form)

    timesheet = form.save(commit=False)
    timesheet.user = user
    timesheet.project = project
    timesheet.task = task
    timesheet.save()

    ActivityLogger.log(user, timesheet, ActivityLog.Action.CREATED, project=project, details={'hours': timesheet.hours})

    return api_response(
        serialize_timesheet(timesheet, {project.id: project}, {task.id: task} if task else {}),
        status=201
    )


class Echo:
    """Bufor "tylko do zapisu" dla csv.writer: zwraca linię zamiast ją przechowywać."""

    def write(self, value):
        return value


def _csv_rows(timesheets, projects, tasks):
    yield CSV_HEADER
    for ts in timesheets:
        project = projects.get(ts.project_id)
        task = tasks.get(ts.task_id)
        yield [
            ts.date.isoformat(),
            project.title if project else 'N/A',
            task.title if task else 'N/A',
            ts.hours,
            ts.status,
            (ts.description or '').replace('\n', ' '),
        ]


@api_login_required
@require_http_methods(["GET"])
def timesheet_export_view(request):
    timesheets = _own_timesheets(request)
    projects, tasks = _related_maps(timesheets)

    writer = csv.writer(Echo())
    response = StreamingHttpResponse(
        (writer.writerow(row) for row in _csv_rows(timesheets, projects, tasks)),
        content_type='text/csv'
    )
    response['Content-Disposition'] = f'attachment; filename="timesheets-{date.today().isoformat()}.csv"'
    return response


def _get_org_timesheet(user, pk):
    return get_object_or_404(Timesheet, pk=pk, user__organization_id=user.organization_id)


@csrf_exempt
@api_login_required
@require_http_methods(["PUT"])
def timesheet_submit_view(request, pk):
    timesheet = _get_org_timesheet(request.user, pk)

    if timesheet.user_id != request.user.id:
        raise Forbidden("Not authorized to submit this timesheet")
    if timesheet.status not in (Timesheet.Status.DRAFT, Timesheet.Status.REJECTED):
        raise BadRequest(f"Cannot submit a timesheet with status '{timesheet.status}'")

    timesheet.status = Timesheet.Status.SUBMITTED
    timesheet.save(update_fields=['status'])
    return api_response(serialize_timesheet(timesheet))


def _review(request, pk, new_status):
    user = request.user
    timesheet = _get_org_timesheet(user, pk)

    if timesheet.status != Timesheet.Status.SUBMITTED:
        raise BadRequest("Only submitted timesheets can be reviewed")

    timesheet.status = new_status
    timesheet.approved_by = user
    timesheet.save(update_fields=['status', 'approved_by'])

    ActivityLogger.log(
        user, timesheet, ActivityLog.Action.STATUS_CHANGE,
        details={'status': new_status, 'owner': timesheet.user_id}
    )
    logger.info("Timesheet %s %s by user %s", timesheet.id, new_status, user.id)
    return api_response(serialize_timesheet(timesheet))


@csrf_exempt
@api_login_required
@require_http_methods(["PUT"])
@role_required(Role.ADMIN, Role.PROJECT_MANAGER, Role.TEAM_LEAD)
def timesheet_approve_view(request, pk):
    return _review(request, pk, Timesheet.Status.APPROVED)


@csrf_exempt
@api_login_required
@require_http_methods(["PUT"])
@role_required(Role.ADMIN, Role.PROJECT_MANAGER, Role.TEAM_LEAD)
def timesheet_reject_view(request, pk):
    return _review(request, pk, Timesheet.Status.REJECTED)
