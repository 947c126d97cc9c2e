"""Job and application operations behind the JSON views.

Each operation checks the requester, mutates through the ORM, then hands the
event to ``jobs.notifications``. Failures are raised as Django exceptions:
``Http404``, ``PermissionDenied``, ``BadRequest`` and ``ValidationError``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import Optional

from django.core.exceptions import BadRequest
from django.http import Http404

from accounts.permissions import CANDIDATE, RECRUITER, Requester, ensure_not_role, ensure_owner, ensure_role
from . import notifications
from .models import Application, ApplicationStatus, Job, JobStatus, SavedJob

logger = logging.getLogger(__name__)

# Wire name -> model field.
JOB_FIELDS = {
    "title": "title",
    "description": "description",
    "location": "location",
    "requirements": "requirements",
    "company": "company",
    "jobType": "job_type",
    "experienceLevel": "experience_level",
}

CLOSING_STATUSES = (JobStatus.CLOSED, JobStatus.EXPIRED)
DECISIONS = (ApplicationStatus.ACCEPTED, ApplicationStatus.REJECTED)


@dataclass
class JobPatch:
    """Fields to change on a job; ``None`` means "leave as is"."""

    title: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    requirements: Optional[str] = None
    company: Optional[str] = None
    job_type: Optional[str] = None
    experience_level: Optional[str] = None

    @classmethod
    def from_payload(cls, payload: dict) -> "JobPatch":
        return cls(**{field: payload.get(key) for key, field in JOB_FIELDS.items()})

    def changes(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}


def _get_job(job_id) -> Job:
    job = Job.objects.select_related("recruiter").filter(id=job_id).first()
    if job is None:
        raise Http404("Job not found")
    return job


# -----------------------------
# Jobs
# -----------------------------
def create_job(payload: dict, requester: Requester) -> Job:
    ensure_role(requester, RECRUITER, "Access forbidden: Recruiters only")

    values = {field: payload[key] for key, field in JOB_FIELDS.items() if payload.get(key) is not None}
    job = Job(recruiter_id=requester.id, **values)
    job.full_clean(exclude=["recruiter"])
    job.save()
    logger.info("Job created: job_id=%s recruiter=%s", job.id, requester.id)

    notifications.notify_new_job(job)
    return job


def list_jobs():
    return Job.objects.recent()


def get_job(job_id) -> Job:
    return _get_job(job_id)


def update_job(job_id, patch: JobPatch, requester: Requester) -> Job:
    job = _get_job(job_id)
    ensure_owner(job, requester, "Access forbidden: You can only edit jobs you posted")

    changes = patch.changes()
    for field, value in changes.items():
        setattr(job, field, value)
    job.full_clean(exclude=["recruiter"])
    job.save()
    logger.info("Job updated: job_id=%s fields=%s", job.id, sorted(changes))
    return job


def delete_job(job_id, requester: Requester) -> None:
    job = _get_job(job_id)
    ensure_owner(job, requester, "Access forbidden: You can only delete jobs you posted")
    # Applications are kept; bookmarks go with the job.
    job.delete()
    logger.info("Job deleted: job_id=%s recruiter=%s", job_id, requester.id)


def search_jobs(q: str = "", *, job_type=None, experience_level=None, location=None):
    return Job.objects.search(
        q=(q or "").strip(),
        job_type=job_type or None,
        experience_level=experience_level or None,
        location=location or None,
    ).recent()


def set_job_status(job_id, status: str, requester: Requester) -> Job:
    ensure_role(requester, RECRUITER, "Access forbidden: Only recruiters can update job status")
    job = _get_job(job_id)
    ensure_owner(job, requester, "Access forbidden: You can only update jobs you posted")
    if status not in CLOSING_STATUSES:
        raise BadRequest('Invalid status. Use "closed" or "expired"')

    job.status = status
    job.save(update_fields=["status", "updated_at"])
    logger.info("Job status changed: job_id=%s status=%s", job.id, status)

    notifications.notify_job_status_changed(job)
    return job


def toggle_bookmark(job_id, requester: Requester) -> bool:
    """Save or un-save a job for a candidate; returns the new state."""
    ensure_role(requester, CANDIDATE, "Access forbidden: Only candidates can bookmark jobs")
    job = _get_job(job_id)
    saved, created = SavedJob.objects.get_or_create(job=job, user_id=requester.id)
    if not created:
        saved.delete()
    logger.info("Bookmark toggled: job_id=%s user=%s saved=%s", job.id, requester.id, created)
    return created


# -----------------------------
# Applications
# -----------------------------
def apply_to_job(job_id, requester: Requester, resume: str, cover_letter: str = "") -> Application:
    job = _get_job(job_id)
    ensure_not_role(requester, RECRUITER, "Access forbidden: Recruiters cannot apply for jobs")
    if not job.is_open:
        raise BadRequest(f"This job is {job.status} and no longer accepts applications")
    if Application.objects.for_job(job.id).for_candidate(requester.id).exists():
        raise BadRequest("You already applied to this job")

    application = Application(
        job=job,
        candidate_id=requester.id,
        resume=(resume or "").strip(),
        cover_letter=(cover_letter or "").strip(),
    )
    application.full_clean(exclude=["job", "candidate"])
    application.save()
    logger.info("Application submitted: app_id=%s job_id=%s user=%s", application.id, job.id, requester.id)

    notifications.notify_application_received(application, job)
    return application


def list_applications(job_id, requester: Requester):
    """Return ``(job, applications)``; applicants are told their application was viewed."""
    job = _get_job(job_id)
    ensure_owner(job, requester, "Access forbidden: You can only view applications for jobs you posted")

    applications = list(Application.objects.for_job(job.id).select_related("candidate"))
    notifications.notify_applications_viewed(job, applications)
    return job, applications


def respond_to_application(job_id, application_id, action: str, requester: Requester):
    """Accept or reject an application; returns ``(application, notification)``."""
    job = Job.objects.select_related("recruiter").filter(id=job_id).first()
    ensure_owner(job, requester, "Access forbidden: Only the job's recruiter can respond to applications")

    application = (
        Application.objects.select_related("candidate")
        .filter(id=application_id, job_id=job.id)
        .first()
    )
    if application is None:
        raise Http404("Application not found")
    if action not in DECISIONS:
        raise BadRequest('Invalid action. Use "accepted" or "rejected"')

    application.status = action
    application.save(update_fields=["status", "updated_at"])
    logger.info("Application %s: app_id=%s job_id=%s", action, application.id, job.id)

    sent = notifications.notify_application_decision(application, job, action)
    return application, (sent[0] if sent else None)

