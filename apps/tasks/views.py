# apps/tasks/views.py
import logging

from django.shortcuts import get_object_or_404
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from apps.core.decorators import api_login_required
from apps.core.exceptions import BadRequest, Forbidden, NotFound
from apps.core.forms import partial_form_data
from apps.core.http import api_list_response, api_response, form_error_message, read_json, validate_form
from apps.core.models import Role
from apps.notifications.models import Notification
from apps.notifications.services import NotificationService
from apps.projects.views import get_project_for
from apps.reports.models import ActivityLog
from apps.reports.services import ActivityLogger
from .adapters.notifier import DjangoTaskNotifier
from .adapters.orm_repositories import DjangoTaskRepository
from .application.use_cases import CreateTaskInput, CreateTaskUseCase, UpdateTaskInput, UpdateTaskUseCase
from .domain.exceptions import TaskNotFound, TransitionBlocked
from .filters import TaskFilter
from .forms import TASK_FIELDS, CommentForm, TaskForm
from .models import Task
from .serializers import serialize_comment, serialize_task

logger = logging.getLogger(__name__)

# Role, które mogą usuwać dowolne zadanie (pozostali tylko własne)
TASK_DELETE_ROLES = (Role.ADMIN, Role.PROJECT_MANAGER, Role.TEAM_LEAD)


def _org_tasks(user):
    return Task.objects.filter(
        project__organization_id=user.organization_id
    ).select_related('reporter').prefetch_related('assignees', 'dependencies')


def get_task_for(user, pk):
    """Zadanie z organizacji użytkownika albo 404."""
    return get_object_or_404(_org_tasks(user), pk=pk)


def _filtered_list(request, qs):
    f = TaskFilter(request.GET, queryset=qs)
    if not f.is_valid():
        raise BadRequest(form_error_message(f.form))
    return api_list_response([serialize_task(t) for t in f.qs])


@csrf_exempt
@api_login_required
@require_http_methods(["GET", "POST"])
def task_collection_view(request):
    if request.method == "POST":
        return _create_task(request)
    return _filtered_list(request, _org_tasks(request.user))


@api_login_required
@require_http_methods(["GET"])
def project_tasks_view(request, project_id):
    project = get_project_for(request.user, project_id)
    return _filtered_list(request, _org_tasks(request.user).filter(project=project))


@csrf_exempt
@api_login_required
@require_http_methods(["GET", "PUT", "DELETE"])
def task_detail_view(request, pk):
    if request.method == "PUT":
        return _update_task(request, pk)
    if request.method == "DELETE":
        return _delete_task(request, pk)

    task = get_task_for(request.user, pk)
    return api_response(serialize_task(task, detail=True))


def _create_task(request):
    user = request.user
    payload = read_json(request)

    project_id = payload.get('project')
    if not project_id:
        raise BadRequest("Please provide a project")
    try:
        project_id = int(project_id)
    except (TypeError, ValueError):
        raise BadRequest("Invalid project id")
    project = get_project_for(user, project_id)

    form = TaskForm(
        partial_form_data(Task(), payload, TASK_FIELDS),
        organization=user.organization_id
    )
    validate_form(form)
    changes = form.entity_changes()

    # 1. Przygotowanie DTO
    input_dto = CreateTaskInput(
        project_id=project.id,
        reporter_id=user.id,
        **changes
    )

    # 2. Złożenie Use Case (Manual Dependency Injection)
    use_case = CreateTaskUseCase(repository=DjangoTaskRepository(), notifier=DjangoTaskNotifier())

    # 3. Wykonanie logiki biznesowej
    try:
        entity = use_case.execute(input_dto)
    except ValueError as e:
        raise BadRequest(str(e))

    return api_response(serialize_task(get_task_for(user, entity.id)), status=201)


def _update_task(request, pk):
    user = request.user
    task_model = get_task_for(user, pk)
    old_status = task_model.status

    payload = read_json(request)
    form = TaskForm(
        partial_form_data(task_model, payload, TASK_FIELDS),
        instance=task_model,
        organization=user.organization_id,
        only=set(payload)
    )
    validate_form(form)

    use_case = UpdateTaskUseCase(repository=DjangoTaskRepository(), notifier=DjangoTaskNotifier())
    try:
        result = use_case.execute(UpdateTaskInput(
            task_id=task_model.id,
            actor_id=user.id,
            changes=form.entity_changes(keys=set(payload))
        ))
    except TaskNotFound as e:
        raise NotFound(str(e))
    except TransitionBlocked as e:
        raise BadRequest(str(e))

    task = get_task_for(user, pk)
    if result.changed_fields:
        project = task.project
        if 'status' in result.changed_fields:
            ActivityLogger.log(
                user, task, ActivityLog.Action.STATUS_CHANGE,
                project=project,
                details={'old_status': old_status, 'new_status': task.status}
            )
        ActivityLogger.log(
            user, task, ActivityLog.Action.UPDATED,
            project=project,
            details={'fields': result.changed_fields}
        )

    return api_response(serialize_task(task, detail=True))


def _delete_task(request, pk):
    user = request.user
    task = get_task_for(user, pk)

    if user.role not in TASK_DELETE_ROLES and task.reporter_id != user.id:
        raise Forbidden(f"User {user.id} is not authorized to delete this task")

    ActivityLogger.log(
        user, task, ActivityLog.Action.DELETED,
        project=task.project,
        details={'title': task.title}
    )

    # Podzadania i timesheety zostają (bez kaskady); historia i komentarze znikają z zadaniem
    task.delete()
    logger.info("Task %s deleted by user %s", pk, user.id)

    return api_response({})


@csrf_exempt
@api_login_required
@require_http_methods(["GET", "POST"])
def task_comments_view(request, pk):
    task = get_task_for(request.user, pk)

    if request.method == "GET":
        comments = task.comments.select_related('user').prefetch_related('mentions')
        return api_list_response([serialize_comment(c) for c in comments])

    user = request.user
    form = CommentForm(read_json(request), task=task, organization=user.organization_id)
    validate_form(form)

    comment = form.save(commit=False)
    comment.task = task
    comment.user = user
    comment.save()
    form.save_m2m()

    service = NotificationService()
    link = f"/tasks/{task.id}"
    author_name = user.name or user.email

    parent = comment.parent_comment
    if parent is not None and parent.user_id and parent.user_id != user.id:
        service.notify(
            parent.user_id,
            Notification.Type.COMMENT_REPLY,
            "New Reply",
            f"{author_name} replied to your comment on: {task.title}",
            sender_id=user.id,
            link=link,
        )

    for mentioned in comment.mentions.all():
        if mentioned.id != user.id:
            service.notify(
                mentioned.id,
                Notification.Type.MENTION,
                "You were mentioned",
                f"{author_name} mentioned you in: {task.title}",
                sender_id=user.id,
                link=link,
            )

    ActivityLogger.log(
        user, task, ActivityLog.Action.COMMENTED,
        project=task.project,
        details={'comment': comment.id}
    )

    return api_response(serialize_comment(comment), status=201)
