"""JSON plumbing shared by the API views."""
import json
import logging
from functools import wraps

from django.core.exceptions import BadRequest, PermissionDenied, ValidationError
from django.http import Http404, JsonResponse

logger = logging.getLogger(__name__)


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)


def validation_errors(exc: ValidationError) -> dict:
    """Model field errors keyed by their camelCase wire name."""
    if not hasattr(exc, "error_dict"):
        return {"__all__": exc.messages}
    return {_camel(field): messages for field, messages in exc.message_dict.items()}


def api_view(view_func):
    """Turn the exceptions raised by the service layer into JSON error responses."""
    @wraps(view_func)
    def _wrapped(request, *args, **kwargs):
        try:
            return view_func(request, *args, **kwargs)
        except Http404 as exc:
            return JsonResponse({"message": str(exc) or "Not found"}, status=404)
        except PermissionDenied as exc:
            return JsonResponse({"message": str(exc) or "Access forbidden"}, status=403)
        except BadRequest as exc:
            return JsonResponse({"message": str(exc) or "Bad request"}, status=400)
        except ValidationError as exc:
            return JsonResponse(
                {"message": "Validation failed", "errors": validation_errors(exc)},
                status=400,
            )
        except Exception:
            logger.exception("Unhandled API error: %s %s", request.method, request.path)
            return JsonResponse({"message": "Internal server error"}, status=500)
    return _wrapped


def json_body(request) -> dict:
    if not request.body:
        return {}
    try:
        payload = json.loads(request.body)
    except ValueError:
        raise BadRequest("Request body must be valid JSON")
    if not isinstance(payload, dict):
        raise BadRequest("Request body must be a JSON object")
    return payload
