import logging

from django.contrib.auth import authenticate, get_user_model
from django.core.exceptions import BadRequest
from django.http import Http404, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods, require_POST

from jobboard.api import api_view, json_body

from .decorators import token_required
from .models import Notification
from .tokens import issue_token

logger = logging.getLogger(__name__)
User = get_user_model()


@csrf_exempt
@require_POST
@api_view
def obtain_token(request):
    """Exchange username/password for a bearer token."""
    payload = json_body(request)
    username = (payload.get("username") or "").strip()
    password = payload.get("password") or ""
    if not username or not password:
        raise BadRequest("Username and password are required")

    user = authenticate(request, username=username, password=password)
    if user is None:
        logger.warning("Token request rejected: username=%s", username)
        return JsonResponse({"message": "Invalid credentials"}, status=401)

    logger.info("Token issued: user_id=%s role=%s", user.pk, user.role)
    return JsonResponse({"token": issue_token(user), "user": user.to_dict()})


@require_http_methods(["GET"])
@api_view
@token_required
def notifications_list(request):
    qs = Notification.objects.filter(user_id=request.requester.id)
    return JsonResponse({"notifications": [n.to_dict() for n in qs]})


@csrf_exempt
@require_http_methods(["GET", "PATCH"])
@api_view
@token_required
def notification_preferences(request):
    user = User.objects.filter(pk=request.requester.id).first()
    if user is None:
        raise Http404("User not found")

    if request.method == "PATCH":
        prefs = json_body(request).get("notificationPreferences") or {}
        if not isinstance(prefs, dict):
            raise BadRequest("notificationPreferences must be an object")
        new_job_posts = prefs.get("newJobPosts")
        if new_job_posts is not None:
            if not isinstance(new_job_posts, bool):
                raise BadRequest("newJobPosts must be true or false")
            user.notify_new_job_posts = new_job_posts
            user.save(update_fields=["notify_new_job_posts"])
            logger.info("Preferences updated: user_id=%s new_job_posts=%s", user.pk, new_job_posts)

    return JsonResponse({"notificationPreferences": user.notification_preferences()})
