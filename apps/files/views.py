# apps/files/views.py
import logging

from django.shortcuts import get_object_or_404
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from apps.core.decorators import api_login_required
from apps.core.exceptions import BadRequest, Forbidden
from apps.core.http import api_list_response, api_response, validate_form
from apps.core.models import Role
from apps.projects.views import get_project_for
from .forms import FileUploadForm
from .models import ProjectFile
from .serializers import serialize_file

logger = logging.getLogger(__name__)

# Poza autorem plik mogą usunąć tylko te role
FILE_DELETE_ROLES = (Role.ADMIN, Role.PROJECT_MANAGER)


@csrf_exempt
@api_login_required
@require_http_methods(["GET", "POST"])
def file_collection_view(request):
    if request.method == "POST":
        return _upload_file(request)

    project_id = request.GET.get('projectId')
    if not project_id:
        raise BadRequest("Please provide a projectId")
    if not project_id.isdigit():
        raise BadRequest("Invalid projectId")

    project = get_project_for(request.user, int(project_id))
    files = ProjectFile.objects.filter(project=project).select_related('uploaded_by')
    return api_list_response([serialize_file(f) for f in files])


def _upload_file(request):
    user = request.user
    data = validate_form(FileUploadForm(request.POST, request.FILES))

    project = get_project_for(user, data['project'])
    upload = data['file']

    project_file = ProjectFile.objects.create(
        name=data['name'] or upload.name,
        file=upload,
        project=project,
        uploaded_by=user,
        size=upload.size,
        type=upload.content_type or '',
    )
    logger.info("File %s uploaded to project %s (%s bytes)", project_file.id, project.id, upload.size)

    return api_response(serialize_file(project_file), status=201)


@csrf_exempt
@api_login_required
@require_http_methods(["DELETE"])
def file_detail_view(request, pk):
    user = request.user
    project_file = get_object_or_404(ProjectFile, pk=pk, uploaded_by__organization_id=user.organization_id)

    if project_file.uploaded_by_id != user.id and user.role not in FILE_DELETE_ROLES:
        raise Forbidden("Not authorized to delete this file")

    project_file.file.delete(save=False)
    project_file.delete()

    return api_response({})
