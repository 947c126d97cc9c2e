import json
from unittest import mock

from django.core import mail
from django.db import DatabaseError
from django.test import TestCase, override_settings
from django.urls import reverse

from accounts.models import User, Notification
from accounts.tokens import issue_token
from .models import Application, Job, SavedJob


def auth(user):
    return {"HTTP_AUTHORIZATION": f"Bearer {issue_token(user)}"}


class ApiTestCase(TestCase):
    def setUp(self):
        self.recruiter = User.objects.create_user(username="rec", password="pass", role="recruiter", email="rec@example.com")
        self.other_recruiter = User.objects.create_user(username="rec2", password="pass", role="recruiter", email="rec2@example.com")
        self.candidate = User.objects.create_user(username="cand", password="pass", role="candidate", email="cand@example.com")

    def make_job(self, **overrides):
        fields = {
            "recruiter": self.recruiter,
            "title": "Backend Engineer",
            "description": "Build APIs in Django",
            "location": "London",
            "company": "ACME",
            "job_type": "full-time",
            "experience_level": "mid",
        }
        fields.update(overrides)
        return Job.objects.create(**fields)

    def send(self, method, url, user=None, payload=None):
        extra = auth(user) if user else {}
        body = json.dumps(payload) if payload is not None else ""
        return getattr(self.client, method)(url, data=body, content_type="application/json", **extra)


class JobCrudTests(ApiTestCase):
    def test_recruiter_creates_open_job(self):
        resp = self.send(
            "post",
            reverse("job_collection"),
            self.recruiter,
            {"title": "QA Engineer", "description": "Testing", "location": "Leeds", "company": "ACME", "jobType": "contract"},
        )
        self.assertEqual(resp.status_code, 201)
        data = resp.json()
        self.assertEqual(data["message"], "Job created successfully")
        self.assertEqual(data["job"]["status"], "open")
        self.assertEqual(data["job"]["jobType"], "contract")
        self.assertEqual(data["job"]["recruiter"], self.recruiter.id)

    def test_candidate_cannot_create_job(self):
        resp = self.send(
            "post",
            reverse("job_collection"),
            self.candidate,
            {"title": "QA Engineer", "description": "Testing", "location": "Leeds", "company": "ACME"},
        )
        self.assertEqual(resp.status_code, 403)
        self.assertFalse(Job.objects.exists())

    def test_create_requires_token(self):
        resp = self.send("post", reverse("job_collection"), payload={"title": "QA"})
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["message"], "No token provided")

    def test_create_missing_required_fields(self):
        resp = self.send("post", reverse("job_collection"), self.recruiter, {"description": "No title"})
        self.assertEqual(resp.status_code, 400)
        errors = resp.json()["errors"]
        self.assertIn("title", errors)
        self.assertIn("company", errors)
        self.assertFalse(Job.objects.exists())

    def test_create_rejects_unknown_job_type(self):
        resp = self.send(
            "post",
            reverse("job_collection"),
            self.recruiter,
            {"title": "QA", "description": "d", "location": "Leeds", "company": "ACME", "jobType": "gig"},
        )
        self.assertEqual(resp.status_code, 400)
        self.assertIn("jobType", resp.json()["errors"])

    def test_invalid_json_body(self):
        resp = self.client.post(
            reverse("job_collection"), data="{not json", content_type="application/json", **auth(self.recruiter)
        )
        self.assertEqual(resp.status_code, 400)

    def test_list_and_get_are_public(self):
        job = self.make_job()
        resp = self.client.get(reverse("job_collection"))
        self.assertEqual(resp.status_code, 200)
        self.assertEqual([item["id"] for item in resp.json()], [job.id])

        resp = self.client.get(reverse("job_detail", args=[job.id]))
        self.assertEqual(resp.json()["job"]["title"], "Backend Engineer")

    def test_get_missing_job(self):
        resp = self.client.get(reverse("job_detail", args=[999]))
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["message"], "Job not found")

    def test_owner_partial_update_keeps_omitted_fields(self):
        job = self.make_job()
        resp = self.send("put", reverse("job_detail", args=[job.id]), self.recruiter, {"title": "Senior Backend Engineer", "location": None})
        self.assertEqual(resp.status_code, 200)
        job.refresh_from_db()
        self.assertEqual(job.title, "Senior Backend Engineer")
        self.assertEqual(job.location, "London")
        self.assertEqual(job.company, "ACME")
        self.assertEqual(job.recruiter, self.recruiter)

    def test_update_cannot_clear_required_field(self):
        job = self.make_job()
        resp = self.send("put", reverse("job_detail", args=[job.id]), self.recruiter, {"title": ""})
        self.assertEqual(resp.status_code, 400)
        job.refresh_from_db()
        self.assertEqual(job.title, "Backend Engineer")

    def test_update_by_other_recruiter_is_forbidden(self):
        job = self.make_job()
        resp = self.send("put", reverse("job_detail", args=[job.id]), self.other_recruiter, {"title": "Hijacked"})
        self.assertEqual(resp.status_code, 403)
        job.refresh_from_db()
        self.assertEqual(job.title, "Backend Engineer")

    def test_update_missing_job(self):
        resp = self.send("put", reverse("job_detail", args=[999]), self.recruiter, {"title": "x"})
        self.assertEqual(resp.status_code, 404)

    def test_delete_by_other_recruiter_is_forbidden(self):
        job = self.make_job()
        resp = self.send("delete", reverse("job_detail", args=[job.id]), self.other_recruiter)
        self.assertEqual(resp.status_code, 403)
        self.assertTrue(Job.objects.filter(id=job.id).exists())

    def test_delete_keeps_applications(self):
        job = self.make_job()
        Application.objects.create(job=job, candidate=self.candidate, resume="cv.pdf")
        SavedJob.objects.create(job=job, user=self.candidate)

        resp = self.send("delete", reverse("job_detail", args=[job.id]), self.recruiter)
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["message"], "Job deleted successfully")
        self.assertFalse(Job.objects.filter(id=job.id).exists())
        self.assertTrue(Application.objects.filter(job_id=job.id).exists())
        self.assertFalse(SavedJob.objects.filter(job_id=job.id).exists())

    def test_method_not_allowed(self):
        job = self.make_job()
        resp = self.client.post(reverse("job_detail", args=[job.id]))
        self.assertEqual(resp.status_code, 405)


class JobSearchTests(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.make_job(title="Backend Engineer", job_type="full-time")
        self.make_job(title="Frontend Engineer", job_type="contract")
        self.make_job(title="Designer", company="Engineering Co", location="Leeds", job_type="full-time", experience_level="senior")
        self.make_job(title="Data Analyst", job_type="full-time")

    def titles(self, resp):
        return sorted(item["title"] for item in resp.json()["results"])

    def test_keyword_and_job_type(self):
        resp = self.client.get(reverse("job_search"), {"q": "engineer", "jobType": "full-time"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(self.titles(resp), ["Backend Engineer", "Designer"])

    def test_keyword_is_case_insensitive(self):
        resp = self.client.get(reverse("job_search"), {"q": "LEEDS"})
        self.assertEqual(self.titles(resp), ["Designer"])

    def test_filters_without_keyword(self):
        resp = self.client.get(reverse("job_search"), {"experienceLevel": "senior", "location": "Leeds"})
        self.assertEqual(self.titles(resp), ["Designer"])

    def test_location_filter_is_exact(self):
        resp = self.client.get(reverse("job_search"), {"location": "lon"})
        self.assertEqual(self.titles(resp), [])

    def test_keyword_is_literal(self):
        resp = self.client.get(reverse("job_search"), {"q": "eng.neer"})
        self.assertEqual(self.titles(resp), [])


class ApplyTests(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.job = self.make_job()

    def test_candidate_applies_and_recruiter_is_notified(self):
        resp = self.send("post", reverse("apply_job", args=[self.job.id]), self.candidate, {"resume": "https://cv.example/cand.pdf"})
        self.assertEqual(resp.status_code, 201)
        app = resp.json()["application"]
        self.assertEqual(app["status"], "pending")
        self.assertEqual(app["coverLetter"], "")
        self.assertEqual(
            list(Notification.objects.filter(user=self.recruiter).values_list("message", flat=True)),
            ["A new candidate applied for your job posting: Backend Engineer"],
        )

    def test_recruiter_cannot_apply(self):
        resp = self.send("post", reverse("apply_job", args=[self.job.id]), self.other_recruiter, {"resume": "cv.pdf"})
        self.assertEqual(resp.status_code, 403)
        self.assertFalse(Application.objects.exists())

    def test_apply_to_missing_job(self):
        resp = self.send("post", reverse("apply_job", args=[999]), self.candidate, {"resume": "cv.pdf"})
        self.assertEqual(resp.status_code, 404)

    def test_resume_is_required(self):
        resp = self.send("post", reverse("apply_job", args=[self.job.id]), self.candidate, {"coverLetter": "Hi"})
        self.assertEqual(resp.status_code, 400)
        self.assertIn("resume", resp.json()["errors"])

    def test_duplicate_application_rejected(self):
        Application.objects.create(job=self.job, candidate=self.candidate, resume="cv.pdf")
        resp = self.send("post", reverse("apply_job", args=[self.job.id]), self.candidate, {"resume": "cv.pdf"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(Application.objects.count(), 1)

    def test_closed_job_rejects_applications(self):
        self.job.status = "closed"
        self.job.save()
        resp = self.send("post", reverse("apply_job", args=[self.job.id]), self.candidate, {"resume": "cv.pdf"})
        self.assertEqual(resp.status_code, 400)


class ApplicationReviewTests(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.job = self.make_job()
        self.second = User.objects.create_user(username="cand2", password="pass", role="candidate", email="cand2@example.com")
        self.app = Application.objects.create(job=self.job, candidate=self.candidate, resume="cv.pdf")
        self.app2 = Application.objects.create(job=self.job, candidate=self.second, resume="cv2.pdf")

    def test_owner_lists_applications_and_applicants_are_notified(self):
        resp = self.send("get", reverse("job_applications", args=[self.job.id]), self.recruiter)
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data["jobTitle"], "Backend Engineer")
        self.assertEqual({a["candidate"]["username"] for a in data["applications"]}, {"cand", "cand2"})
        for user in (self.candidate, self.second):
            self.assertEqual(
                list(Notification.objects.filter(user=user).values_list("message", flat=True)),
                ['Your application for the job "Backend Engineer" has been viewed by the recruiter.'],
            )

    def test_other_recruiter_cannot_list_applications(self):
        resp = self.send("get", reverse("job_applications", args=[self.job.id]), self.other_recruiter)
        self.assertEqual(resp.status_code, 403)
        self.assertFalse(Notification.objects.exists())

    def test_accept_application(self):
        url = reverse("respond_application", args=[self.job.id, self.app.id])
        resp = self.send("patch", url, self.recruiter, {"action": "accepted"})
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data["message"], "Application accepted")
        self.assertEqual(data["notification"]["user"], self.candidate.id)
        self.app.refresh_from_db()
        self.assertEqual(self.app.status, "accepted")
        self.assertTrue(
            Notification.objects.filter(user=self.candidate, message__startswith="Congratulations!").exists()
        )

    def test_reject_application(self):
        url = reverse("respond_application", args=[self.job.id, self.app.id])
        resp = self.send("patch", url, self.recruiter, {"action": "rejected"})
        self.assertEqual(resp.status_code, 200)
        self.app.refresh_from_db()
        self.assertEqual(self.app.status, "rejected")
        self.assertTrue(Notification.objects.filter(user=self.candidate, message__contains="was rejected").exists())

    def test_invalid_action_leaves_status_unchanged(self):
        url = reverse("respond_application", args=[self.job.id, self.app.id])
        resp = self.send("patch", url, self.recruiter, {"action": "maybe"})
        self.assertEqual(resp.status_code, 400)
        self.app.refresh_from_db()
        self.assertEqual(self.app.status, "pending")
        self.assertFalse(Notification.objects.filter(user=self.candidate).exists())

    def test_other_recruiter_cannot_respond(self):
        url = reverse("respond_application", args=[self.job.id, self.app.id])
        resp = self.send("patch", url, self.other_recruiter, {"action": "accepted"})
        self.assertEqual(resp.status_code, 403)
        self.app.refresh_from_db()
        self.assertEqual(self.app.status, "pending")

    def test_respond_on_missing_job_is_forbidden(self):
        url = reverse("respond_application", args=[999, self.app.id])
        resp = self.send("patch", url, self.recruiter, {"action": "accepted"})
        self.assertEqual(resp.status_code, 403)

    def test_application_must_belong_to_job(self):
        other_job = self.make_job(title="Other")
        url = reverse("respond_application", args=[other_job.id, self.app.id])
        resp = self.send("patch", url, self.recruiter, {"action": "accepted"})
        self.assertEqual(resp.status_code, 404)
        self.app.refresh_from_db()
        self.assertEqual(self.app.status, "pending")

    @override_settings(NOTIFICATION_EMAILS=True)
    def test_decision_is_mailed_when_enabled(self):
        url = reverse("respond_application", args=[self.job.id, self.app.id])
        self.send("patch", url, self.recruiter, {"action": "accepted"})
        self.assertEqual(len(mail.outbox), 1)
        self.assertEqual(mail.outbox[0].to, ["cand@example.com"])
        self.assertIn("Backend Engineer", mail.outbox[0].body)


class JobStatusTests(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.job = self.make_job()
        self.bookmarker = User.objects.create_user(username="fan", password="pass", role="candidate", email="fan@example.com")
        Application.objects.create(job=self.job, candidate=self.candidate, resume="cv.pdf")
        SavedJob.objects.create(job=self.job, user=self.candidate)
        SavedJob.objects.create(job=self.job, user=self.bookmarker)

    def test_close_notifies_applicants_and_bookmarkers_once(self):
        resp = self.send("patch", reverse("job_status", args=[self.job.id]), self.recruiter, {"status": "closed"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["message"], "Job status updated to closed")
        self.job.refresh_from_db()
        self.assertEqual(self.job.status, "closed")

        expected = 'The job "Backend Engineer" has been marked as closed.'
        self.assertEqual(Notification.objects.filter(user=self.candidate, message=expected).count(), 1)
        self.assertEqual(Notification.objects.filter(user=self.bookmarker, message=expected).count(), 1)
        self.assertEqual(Notification.objects.count(), 2)

    def test_invalid_status(self):
        resp = self.send("patch", reverse("job_status", args=[self.job.id]), self.recruiter, {"status": "open"})
        self.assertEqual(resp.status_code, 400)
        self.job.refresh_from_db()
        self.assertEqual(self.job.status, "open")

    def test_candidate_cannot_change_status(self):
        resp = self.send("patch", reverse("job_status", args=[self.job.id]), self.candidate, {"status": "closed"})
        self.assertEqual(resp.status_code, 403)

    def test_other_recruiter_cannot_change_status(self):
        resp = self.send("patch", reverse("job_status", args=[self.job.id]), self.other_recruiter, {"status": "expired"})
        self.assertEqual(resp.status_code, 403)
        self.job.refresh_from_db()
        self.assertEqual(self.job.status, "open")
        self.assertFalse(Notification.objects.exists())


class NewJobNotificationTests(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.candidate.notify_new_job_posts = True
        self.candidate.save()
        self.quiet = User.objects.create_user(username="quiet", password="pass", role="candidate", email="quiet@example.com")

    def post_job(self):
        return self.send(
            "post",
            reverse("job_collection"),
            self.recruiter,
            {"title": "Platform Engineer", "description": "Infra", "location": "Remote", "company": "Globex"},
        )

    def test_opted_in_candidate_gets_exactly_one_notification(self):
        resp = self.post_job()
        self.assertEqual(resp.status_code, 201)
        messages = list(Notification.objects.filter(user=self.candidate).values_list("message", flat=True))
        self.assertEqual(messages, ["A new job has been posted: Platform Engineer at Globex"])
        self.assertFalse(Notification.objects.filter(user=self.quiet).exists())
        self.assertFalse(Notification.objects.filter(user=self.recruiter).exists())

    def test_failed_notification_write_does_not_fail_request(self):
        with mock.patch.object(Notification.objects, "create", side_effect=DatabaseError("disk full")):
            resp = self.post_job()
        self.assertEqual(resp.status_code, 201)
        self.assertTrue(Job.objects.filter(title="Platform Engineer").exists())
        self.assertFalse(Notification.objects.exists())


class BookmarkTests(ApiTestCase):
    def test_toggle_bookmark(self):
        job = self.make_job()
        url = reverse("toggle_bookmark", args=[job.id])

        resp = self.send("post", url, self.candidate)
        self.assertEqual(resp.status_code, 200)
        self.assertTrue(resp.json()["bookmarked"])
        self.assertTrue(SavedJob.objects.filter(job=job, user=self.candidate).exists())

        resp = self.send("post", url, self.candidate)
        self.assertFalse(resp.json()["bookmarked"])
        self.assertFalse(SavedJob.objects.filter(job=job, user=self.candidate).exists())

    def test_recruiter_cannot_bookmark(self):
        job = self.make_job()
        resp = self.send("post", reverse("toggle_bookmark", args=[job.id]), self.recruiter)
        self.assertEqual(resp.status_code, 403)
