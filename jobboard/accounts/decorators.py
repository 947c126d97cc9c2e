import logging
from functools import wraps

from django.core import signing
from django.http import JsonResponse

from .permissions import Requester
from .tokens import verify_token

logger = logging.getLogger(__name__)


def _bearer_token(request) -> str:
    scheme, _, token = (request.headers.get("Authorization") or "").partition(" ")
    if scheme.lower() != "bearer":
        return ""
    return token.strip()


def token_required(view_func):
    """Verify the bearer token and expose it as ``request.requester``."""
    @wraps(view_func)
    def _wrapped(request, *args, **kwargs):
        token = _bearer_token(request)
        if not token:
            return JsonResponse({"message": "No token provided"}, status=401)
        try:
            claims = verify_token(token)
        except signing.BadSignature:
            logger.warning("Rejected bearer token: path=%s", request.path)
            return JsonResponse({"message": "Invalid token"}, status=401)
        request.requester = Requester(id=claims["id"], role=claims["role"])
        return view_func(request, *args, **kwargs)
    return _wrapped
