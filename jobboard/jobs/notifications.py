"""In-app notification fan-out for job and application events.

Every event resolves a recipient set and a message template, then
``fan_out`` writes one Notification per distinct recipient. Delivery is
best-effort: a failed write is logged and skipped, it never fails the
request that triggered it.
"""
from __future__ import annotations

import logging
from typing import Iterable

from django.conf import settings
from django.contrib.auth import get_user_model
from django.core.mail import send_mail
from django.db import DatabaseError, transaction
from django.db.models import Q

from accounts.models import Notification

logger = logging.getLogger(__name__)

NEW_JOB_POSTED = "A new job has been posted: {title} at {company}"
APPLICATION_RECEIVED = "A new candidate applied for your job posting: {title}"
APPLICATION_VIEWED = 'Your application for the job "{title}" has been viewed by the recruiter.'
APPLICATION_ACCEPTED = 'Congratulations! Your application for "{title}" was accepted by the recruiter.'
APPLICATION_REJECTED = 'We\'re sorry to inform you that your application for "{title}" was rejected by the recruiter.'
JOB_STATUS_CHANGED = 'The job "{title}" has been marked as {status}.'

DECISION_TEMPLATES = {
    "accepted": APPLICATION_ACCEPTED,
    "rejected": APPLICATION_REJECTED,
}


def fan_out(recipients: Iterable, template: str, **context) -> list[Notification]:
    """Create one notification per distinct recipient and return the ones saved."""
    message = template.format(**context)
    created = []
    seen = set()
    for user in recipients:
        if user is None or user.pk in seen:
            continue
        seen.add(user.pk)
        notification = _create_notification(user, message)
        if notification is not None:
            created.append(notification)
    logger.info("Notifications sent: recipients=%s created=%s", len(seen), len(created))
    return created


def _create_notification(user, message: str) -> Notification | None:
    try:
        # Savepoint so a failed insert leaves the surrounding transaction usable.
        with transaction.atomic():
            notification = Notification.objects.create(user=user, message=message)
    except DatabaseError:
        logger.exception("Failed to create in-app notification: user_id=%s", user.pk)
        return None
    if getattr(settings, "NOTIFICATION_EMAILS", False):
        _send_email_copy(user, message)
    return notification


def _send_email_copy(user, message: str) -> None:
    to_email = getattr(user, "email", None)
    if not to_email:
        return
    try:
        send_mail(
            subject="JobBoard notification",
            message=message,
            from_email=getattr(settings, "DEFAULT_FROM_EMAIL", "no-reply@jobboard.local"),
            recipient_list=[to_email],
            fail_silently=False,
        )
        logger.info("Email notification sent: to=%s", to_email)
    except Exception:
        logger.exception("Email notification failed: to=%s", to_email)


# -----------------------------
# Events
# -----------------------------
def notify_new_job(job) -> list[Notification]:
    User = get_user_model()
    candidates = User.objects.filter(role=User.Role.CANDIDATE, notify_new_job_posts=True).order_by("id")
    return fan_out(candidates, NEW_JOB_POSTED, title=job.title, company=job.company)


def notify_application_received(application, job) -> list[Notification]:
    return fan_out([job.recruiter], APPLICATION_RECEIVED, title=job.title)


def notify_applications_viewed(job, applications) -> list[Notification]:
    return fan_out((app.candidate for app in applications), APPLICATION_VIEWED, title=job.title)


def notify_application_decision(application, job, action: str) -> list[Notification]:
    return fan_out([application.candidate], DECISION_TEMPLATES[action], title=job.title)


def job_followers(job):
    """Users who applied to or bookmarked ``job``, each listed once."""
    User = get_user_model()
    return (
        User.objects.filter(Q(applications__job_id=job.id) | Q(saved_jobs__job_id=job.id))
        .distinct()
        .order_by("id")
    )


def notify_job_status_changed(job) -> list[Notification]:
    return fan_out(job_followers(job), JOB_STATUS_CHANGED, title=job.title, status=job.status)
