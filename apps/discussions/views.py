from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from apps.core.decorators import api_login_required
from apps.core.exceptions import BadRequest
from apps.core.http import api_list_response, api_response, read_json, validate_form
from apps.core.serializers import isoformat, serialize_user_brief
from apps.projects.views import get_project_for
from apps.reports.models import ActivityLog
from apps.reports.services import ActivityLogger
from .forms import DiscussionForm
from .models import Discussion


def serialize_discussion(d):
    sender = serialize_user_brief(d.sender)
    sender['email'] = d.sender.email
    return {
        'id': d.id,
        'project': d.project_id,
        'sender': sender,
        'content': d.content,
        'created_at': isoformat(d.created_at),
    }


def _project_id(value, name='projectId'):
    try:
        return int(value)
    except (TypeError, ValueError):
        raise BadRequest(f"Please provide a valid {name}")


@csrf_exempt
@api_login_required
@require_http_methods(["GET", "POST"])
def discussion_collection_view(request):
    if request.method == "POST":
        return _send_message(request)

    if not request.GET.get('projectId'):
        raise BadRequest("Please provide a projectId")

    project = get_project_for(request.user, _project_id(request.GET['projectId']))
    # Najstarsze pierwsze (kolejność czatu)
    messages = Discussion.objects.filter(project=project).select_related('sender')
    return api_list_response([serialize_discussion(d) for d in messages])


def _send_message(request):
    payload = read_json(request)
    if not payload.get('project'):
        raise BadRequest("Please provide a project")

    project = get_project_for(request.user, _project_id(payload['project'], 'project'))
    form = DiscussionForm(payload)
    validate_form(form)

    discussion = form.save(commit=False)
    discussion.project = project
    discussion.sender = request.user
    discussion.save()

    ActivityLogger.log(request.user, discussion, ActivityLog.Action.CREATED, project=project)
    return api_response(serialize_discussion(discussion), status=201)
