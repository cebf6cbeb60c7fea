# apps/core/http.py
import json

from django.http import JsonResponse

from .exceptions import BadRequest


def read_json(request):
    """Zwraca body żądania jako dict (pusty dict dla pustego body)."""
    if not request.body:
        return {}
    try:
        payload = json.loads(request.body)
    except (TypeError, ValueError):
        raise BadRequest("Invalid JSON body")
    if not isinstance(payload, dict):
        raise BadRequest("JSON body must be an object")
    return payload


def api_response(data=None, status=200, **extra):
    body = {'success': True}
    body.update(extra)
    if data is not None:
        body['data'] = data
    return JsonResponse(body, status=status, safe=False)


def api_list_response(items, status=200):
    return api_response(items, status=status, count=len(items))


def form_error_message(form):
    """Spłaszcza błędy formularza do jednego komunikatu."""
    parts = []
    for field, errors in form.errors.items():
        text = ' '.join(str(e) for e in errors)
        if field == '__all__':
            parts.append(text)
        else:
            parts.append(f"{field}: {text}")
    return '; '.join(parts) or "Invalid data"


def validate_form(form):
    if not form.is_valid():
        raise BadRequest(form_error_message(form))
    return form.cleaned_data
