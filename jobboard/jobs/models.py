from django.conf import settings
from django.db import models
from django.db.models import Q


class JobType(models.TextChoices):
    FULL_TIME = "full-time", "Full-time"
    PART_TIME = "part-time", "Part-time"
    CONTRACT = "contract", "Contract"
    INTERNSHIP = "internship", "Internship"
    TEMPORARY = "temporary", "Temporary"


class ExperienceLevel(models.TextChoices):
    ENTRY = "entry", "Entry"
    MID = "mid", "Mid"
    SENIOR = "senior", "Senior"
    LEAD = "lead", "Lead"


class JobStatus(models.TextChoices):
    OPEN = "open", "Open"
    CLOSED = "closed", "Closed"
    EXPIRED = "expired", "Expired"


class ApplicationStatus(models.TextChoices):
    PENDING = "pending", "Pending"
    ACCEPTED = "accepted", "Accepted"
    REJECTED = "rejected", "Rejected"


class JobQuerySet(models.QuerySet):
    def recent(self):
        return self.order_by("-created_at", "-id")

    def search(self, *, q=None, job_type=None, experience_level=None, location=None):
        """Keyword over title/location/company AND exact-match filters.

        The keyword is a plain case-insensitive substring; an empty keyword
        matches every job.
        """
        qs = self
        if q:
            qs = qs.filter(Q(title__icontains=q) | Q(location__icontains=q) | Q(company__icontains=q))
        if job_type:
            qs = qs.filter(job_type=job_type)
        if experience_level:
            qs = qs.filter(experience_level=experience_level)
        if location:
            qs = qs.filter(location=location)
        return qs


class Job(models.Model):
    recruiter = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="jobs")
    title = models.CharField(max_length=255)
    description = models.TextField()
    location = models.CharField(max_length=255)
    requirements = models.TextField(blank=True, default="")
    company = models.CharField(max_length=255)
    job_type = models.CharField(max_length=20, choices=JobType.choices, default=JobType.FULL_TIME)
    experience_level = models.CharField(max_length=20, choices=ExperienceLevel.choices, default=ExperienceLevel.ENTRY)
    status = models.CharField(max_length=20, choices=JobStatus.choices, default=JobStatus.OPEN)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = JobQuerySet.as_manager()

    def __str__(self):
        return f"{self.title} @ {self.company}"

    @property
    def is_open(self) -> bool:
        return self.status == JobStatus.OPEN

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "location": self.location,
            "requirements": self.requirements,
            "company": self.company,
            "jobType": self.job_type,
            "experienceLevel": self.experience_level,
            "recruiter": self.recruiter_id,
            "status": self.status,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }


class ApplicationQuerySet(models.QuerySet):
    def for_job(self, job_id):
        return self.filter(job_id=job_id)

    def for_candidate(self, user_id):
        return self.filter(candidate_id=user_id)


class Application(models.Model):
    candidate = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="applications")
    # Applications outlive their job: no cascade and no database constraint.
    job = models.ForeignKey(
        Job,
        on_delete=models.DO_NOTHING,
        db_constraint=False,
        related_name="applications",
    )
    resume = models.TextField()
    cover_letter = models.TextField(blank=True, default="")
    status = models.CharField(max_length=20, choices=ApplicationStatus.choices, default=ApplicationStatus.PENDING)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    objects = ApplicationQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"application #{self.id} job={self.job_id} candidate={self.candidate_id}"

    def to_dict(self, *, with_candidate=False):
        data = {
            "id": self.id,
            "job": self.job_id,
            "candidate": self.candidate_id,
            "resume": self.resume,
            "coverLetter": self.cover_letter,
            "status": self.status,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
        if with_candidate:
            data["candidate"] = {
                "id": self.candidate_id,
                "username": self.candidate.username,
                "email": self.candidate.email,
            }
        return data


class SavedJob(models.Model):
    """A candidate's bookmark on a job."""

    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="saved_jobs")
    job = models.ForeignKey(Job, on_delete=models.CASCADE, related_name="saved_by")
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ["-created_at"]
        unique_together = ("user", "job")

    def __str__(self):
        return f"{self.user_id} saved {self.job_id}"
