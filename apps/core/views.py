import logging

from django.conf import settings
from django.contrib.auth import authenticate, get_user_model
from django.db import transaction
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from apps.reports.models import ActivityLog
from apps.reports.services import ActivityLogger
from .auth import issue_token, set_token_cookie
from .decorators import api_login_required, role_required
from .exceptions import BadRequest, NotAuthenticated
from .forms import LoginForm, MemberCreateForm, RegisterForm
from .http import api_list_response, api_response, read_json, validate_form
from .models import Organization, Role
from .serializers import serialize_organization, serialize_user

logger = logging.getLogger(__name__)

User = get_user_model()


def _token_response(user, status=200):
    token = issue_token(user)
    response = api_response(status=status, token=token, user=serialize_user(user))
    return set_token_cookie(response, token)


@csrf_exempt
@require_http_methods(["POST"])
def register_view(request):
    data = validate_form(RegisterForm(read_json(request)))

    with transaction.atomic():
        organization = None
        if data['organization_name']:
            organization = Organization.objects.create(name=data['organization_name'])

        # Pierwszy użytkownik zakładający organizację zostaje adminem
        user = User.objects.create_user(
            username=data['email'],
            email=data['email'],
            password=data['password'],
            name=data['name'],
            role=Role.ADMIN if organization else Role.MEMBER,
            organization=organization,
        )

        if organization:
            organization.owner = user
            organization.save(update_fields=['owner'])

    logger.info("Registered user %s (organization=%s)", user.id, user.organization_id)
    return _token_response(user)


@csrf_exempt
@require_http_methods(["POST"])
def login_view(request):
    form = LoginForm(read_json(request))
    if not form.is_valid():
        raise BadRequest("Please provide an email and password")

    user = authenticate(
        request,
        username=form.cleaned_data['email'].lower(),
        password=form.cleaned_data['password']
    )
    if user is None:
        raise NotAuthenticated("Invalid credentials")

    if user.organization_id:
        ActivityLogger.log(user, user, ActivityLog.Action.LOGIN)

    return _token_response(user)


@csrf_exempt
@require_http_methods(["POST"])
def logout_view(request):
    response = api_response(message="Logged out")
    response.delete_cookie(settings.AUTH_TOKEN_COOKIE)
    return response


@api_login_required
@require_http_methods(["GET"])
def me_view(request):
    user = request.user
    data = serialize_user(user)
    data['organization'] = serialize_organization(user.organization)
    return api_response(data)


@csrf_exempt
@api_login_required
@require_http_methods(["GET", "POST"])
def user_collection_view(request):
    if request.method == "POST":
        return _create_member(request)

    # Użytkownicy tylko z własnej organizacji
    if not request.user.organization_id:
        return api_list_response([])
    users = User.objects.filter(organization=request.user.organization_id).order_by('name')
    return api_list_response([serialize_user(u) for u in users])


@role_required(Role.ADMIN)
def _create_member(request):
    if not request.user.organization_id:
        raise BadRequest("Admin does not belong to an organization")

    data = validate_form(MemberCreateForm(read_json(request)))
    user = User.objects.create_user(
        username=data['email'],
        email=data['email'],
        password=data['password'],
        name=data['name'],
        role=data['role'] or Role.MEMBER,
        organization_id=request.user.organization_id,
    )
    ActivityLogger.log(request.user, user, ActivityLog.Action.CREATED)
    return api_response(serialize_user(user), status=201)
