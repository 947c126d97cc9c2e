import random

from django.contrib.auth import get_user_model
from django.core.management.base import BaseCommand
from django.db import transaction

from accounts.tokens import issue_token
from jobs.models import Application, ApplicationStatus, ExperienceLevel, Job, JobType, SavedJob

User = get_user_model()


class Command(BaseCommand):
    help = "Seed demo data (recruiters, candidates, jobs, applications, bookmarks) and print bearer tokens."

    def add_arguments(self, parser):
        parser.add_argument("--prefix", type=str, default="demo")
        parser.add_argument("--recruiters", type=int, default=3)
        parser.add_argument("--candidates", type=int, default=6)
        parser.add_argument("--jobs-per-recruiter", type=int, default=4)
        parser.add_argument("--applications-per-candidate", type=int, default=2)
        parser.add_argument("--password", type=str, default="DemoPass123!")
        parser.add_argument("--seed", type=int, default=42)
        parser.add_argument("--wipe", action="store_true", help="Delete existing users starting with prefix before seeding.")

    def _make_user(self, username, email, role, password, notify_new_job_posts=False):
        user, _ = User.objects.get_or_create(
            username=username,
            defaults={"email": email, "role": role, "is_active": True},
        )
        # Keep demo credentials predictable.
        user.email = email
        user.role = role
        user.is_active = True
        user.notify_new_job_posts = notify_new_job_posts
        user.set_password(password)
        user.save()
        return user

    @transaction.atomic
    def handle(self, *args, **opts):
        rnd = random.Random(opts["seed"])
        prefix = (opts["prefix"] or "demo").strip().lower()
        recruiters_n = max(1, int(opts["recruiters"]))
        candidates_n = max(1, int(opts["candidates"]))
        jobs_per_recruiter = max(1, int(opts["jobs_per_recruiter"]))
        apps_per_candidate = max(0, int(opts["applications_per_candidate"]))
        password = opts["password"]

        if opts["wipe"]:
            wiped_ids = User.objects.filter(username__startswith=f"{prefix}_").values_list("id", flat=True)
            # Applications are not removed with their job, so clear them explicitly.
            Application.objects.filter(job__recruiter_id__in=list(wiped_ids)).delete()
            User.objects.filter(id__in=list(wiped_ids)).delete()

        company_names = [
            "NorthBridge Labs",
            "Harbor Metrics",
            "BluePeak Systems",
            "CedarStone Digital",
            "OrbitGrid Tech",
        ]
        job_templates = [
            ("Backend Engineer", "Build and maintain APIs, background jobs, and PostgreSQL schemas."),
            ("Frontend Engineer", "Develop responsive interfaces with modern JavaScript and API integrations."),
            ("Data Analyst", "Transform product and hiring data into dashboards and actionable insights."),
            ("DevOps Engineer", "Automate CI/CD pipelines, deployments, and runtime monitoring."),
            ("QA Engineer", "Write test cases, automate regression suites, and improve release quality."),
            ("Product Designer", "Prototype user journeys and design system components."),
        ]
        locations = ["London", "Manchester", "Leeds", "Bristol", "Remote"]

        created_jobs = []
        recruiters = []
        candidates = []

        for i in range(1, recruiters_n + 1):
            username = f"{prefix}_recruiter_{i}"
            user = self._make_user(username, f"{username}@example.com", User.Role.RECRUITER, password)
            recruiters.append(user)
            company = company_names[(i - 1) % len(company_names)]

            for j in range(1, jobs_per_recruiter + 1):
                title, description = job_templates[(i + j - 2) % len(job_templates)]
                job, _ = Job.objects.get_or_create(
                    recruiter=user,
                    title=f"{title} - Team {i}.{j}",
                    defaults={
                        "description": description,
                        "location": rnd.choice(locations),
                        "company": company,
                        "requirements": "3+ years of relevant experience",
                        "job_type": rnd.choice(JobType.values),
                        "experience_level": rnd.choice(ExperienceLevel.values),
                    },
                )
                created_jobs.append(job)

        for i in range(1, candidates_n + 1):
            username = f"{prefix}_candidate_{i}"
            user = self._make_user(
                username,
                f"{username}@example.com",
                User.Role.CANDIDATE,
                password,
                notify_new_job_posts=(i % 2 == 1),
            )
            candidates.append(user)

            for job in rnd.sample(created_jobs, k=min(2, len(created_jobs))):
                SavedJob.objects.get_or_create(job=job, user=user)

            for job in rnd.sample(created_jobs, k=min(apps_per_candidate, len(created_jobs))):
                Application.objects.get_or_create(
                    job=job,
                    candidate=user,
                    defaults={
                        "resume": f"https://example.com/resumes/{username}.pdf",
                        "cover_letter": "I am interested in this role and believe my background is a strong fit.",
                        "status": rnd.choices(ApplicationStatus.values, weights=[60, 25, 15], k=1)[0],
                    },
                )

        self.stdout.write(self.style.SUCCESS("Seeded demo data successfully."))
        self.stdout.write(f"Created/updated recruiters: {recruiters_n}")
        self.stdout.write(f"Created/updated candidates: {candidates_n}")
        self.stdout.write(f"Created/updated jobs target: {recruiters_n * jobs_per_recruiter}")
        self.stdout.write("")
        self.stdout.write(f"Sample credentials (password: {password}) and bearer tokens:")
        for user in recruiters[:3] + candidates[:3]:
            self.stdout.write(f"  {user.username} [{user.role}] {issue_token(user)}")
