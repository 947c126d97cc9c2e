from dataclasses import dataclass

from django.core.exceptions import PermissionDenied

RECRUITER = "recruiter"
CANDIDATE = "candidate"


@dataclass(frozen=True)
class Requester:
    """Identity taken from a verified bearer token."""

    id: int
    role: str


def ensure_role(requester: Requester, role: str, message: str) -> None:
    if requester.role != role:
        raise PermissionDenied(message)


def ensure_not_role(requester: Requester, role: str, message: str) -> None:
    if requester.role == role:
        raise PermissionDenied(message)


def ensure_owner(job, requester: Requester, message: str) -> None:
    """Only the recruiter who posted ``job`` may manage it."""
    if job is None or job.recruiter_id != requester.id:
        raise PermissionDenied(message)
