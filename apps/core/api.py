# apps/core/api.py
import json
import logging
from functools import wraps

from django.conf import settings
from django.http import JsonResponse
from django.utils.dateparse import parse_date

from .errors import Forbidden, NotFound, ServiceError, Unauthorized, ValidationFailed
from .softdelete import include_deleted, only_deleted

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 200


def error_response(error):
    payload = {"status": "error", "code": error.code, "message": error.message}
    payload.update(error.extra)
    return JsonResponse(payload, status=error.status)


def json_view(view=None, *, login=True):
    """
    Wrap a view returning JSON.

    - rejects anonymous users with a 401 JSON body (no redirect to a login page)
    - turns ``ServiceError`` into ``{"status": "error", "code", "message"}``
    - logs anything else and answers 500 without the traceback
    """
    def decorator(func):
        @wraps(func)
        def wrapper(request, *args, **kwargs):
            try:
                if login and not request.user.is_authenticated:
                    raise Unauthorized()
                return func(request, *args, **kwargs)
            except ServiceError as e:
                if e.status >= 500:
                    logger.error("%s %s failed: %s", request.method, request.path, e.message)
                return error_response(e)
            except Exception as e:
                logger.exception("Unhandled error in %s %s", request.method, request.path)
                payload = {
                    "status": "error",
                    "code": "INTERNAL_ERROR",
                    "message": ServiceError.default_message,
                }
                if settings.DEBUG:
                    payload["detail"] = str(e)
                return JsonResponse(payload, status=500)
        return wrapper

    if view is not None:
        return decorator(view)
    return decorator


def parse_json(request):
    if not request.body:
        return {}
    try:
        data = json.loads(request.body.decode("utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise ValidationFailed("Format JSON tidak valid.")
    if not isinstance(data, dict):
        raise ValidationFailed("Body request harus berupa objek JSON.")
    return data


def raise_form_errors(form):
    """Raise ``ValidationFailed`` carrying the first message and all field errors."""
    errors = {field: [str(m) for m in messages] for field, messages in form.errors.items()}
    first = next(iter(errors.values()))[0] if errors else None
    raise ValidationFailed(first, errors=errors)


def deleted_filter(request, where, allowed):
    """
    Apply ``?deleted=only|all`` to a list predicate.

    Returns ``(where, scoped)`` for ``Repository.find_many``. Only callers with
    ``allowed`` may look at tombstoned rows.
    """
    mode = request.GET.get("deleted")
    if not mode:
        return where, True
    if not allowed:
        raise Forbidden("Hanya admin yang dapat melihat data yang dihapus.")
    if mode == "only":
        return only_deleted(where), True
    if mode == "all":
        return include_deleted(where), False
    raise ValidationFailed("Parameter 'deleted' harus 'only' atau 'all'.")


def get_or_404(repository, where, message=None):
    obj = repository.find_unique(where)
    if obj is None:
        raise NotFound(message)
    return obj


def date_param(request, name):
    """``?name=YYYY-MM-DD`` as a date, None when absent."""
    value = request.GET.get(name)
    if not value:
        return None
    try:
        parsed = parse_date(value)
    except ValueError:
        parsed = None
    if parsed is None:
        raise ValidationFailed(f"Parameter '{name}' harus berformat YYYY-MM-DD.")
    return parsed


def _int_param(value, default):
    try:
        return max(int(value), 1)
    except (TypeError, ValueError):
        return default


def paginate(request, queryset):
    """Slice ``queryset`` by ``?page=&limit=`` and return (items, pagination)."""
    page = _int_param(request.GET.get("page"), 1)
    limit = min(_int_param(request.GET.get("limit"), DEFAULT_PAGE_SIZE), MAX_PAGE_SIZE)
    total = queryset.count()
    offset = (page - 1) * limit
    items = list(queryset[offset:offset + limit])
    return items, {
        "page": page,
        "limit": limit,
        "total": total,
        "total_pages": (total + limit - 1) // limit,
    }
