import json

from django.core import signing
from django.test import TestCase, override_settings
from django.urls import reverse

from .models import User, Notification
from .tokens import issue_token, verify_token


class TokenTests(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(username="rec", password="pass12345", role="recruiter", email="rec@example.com")

    def test_obtain_token_with_valid_credentials(self):
        resp = self.client.post(
            reverse("obtain_token"),
            data=json.dumps({"username": "rec", "password": "pass12345"}),
            content_type="application/json",
        )
        self.assertEqual(resp.status_code, 200)
        data = resp.json()
        self.assertEqual(data["user"]["role"], "recruiter")
        self.assertEqual(verify_token(data["token"]), {"id": self.user.id, "role": "recruiter"})

    def test_obtain_token_with_wrong_password(self):
        resp = self.client.post(
            reverse("obtain_token"),
            data=json.dumps({"username": "rec", "password": "nope"}),
            content_type="application/json",
        )
        self.assertEqual(resp.status_code, 401)
        self.assertNotIn("token", resp.json())

    def test_obtain_token_requires_both_fields(self):
        resp = self.client.post(reverse("obtain_token"), data=json.dumps({"username": "rec"}), content_type="application/json")
        self.assertEqual(resp.status_code, 400)

    def test_tampered_token_is_rejected(self):
        token = issue_token(self.user)
        with self.assertRaises(signing.BadSignature):
            verify_token(token[:-2] + "xx")

        resp = self.client.get(reverse("notifications_list"), HTTP_AUTHORIZATION=f"Bearer {token}xx")
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["message"], "Invalid token")

    def test_non_bearer_scheme_is_treated_as_missing(self):
        resp = self.client.get(reverse("notifications_list"), HTTP_AUTHORIZATION="Basic cmVjOnBhc3M=")
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["message"], "No token provided")

    @override_settings(AUTH_TOKEN_MAX_AGE=-1)
    def test_expired_token_is_rejected(self):
        token = issue_token(self.user)
        resp = self.client.get(reverse("notifications_list"), HTTP_AUTHORIZATION=f"Bearer {token}")
        self.assertEqual(resp.status_code, 401)


class NotificationEndpointTests(TestCase):
    def setUp(self):
        self.user = User.objects.create_user(username="cand", password="pass", role="candidate", email="cand@example.com")
        self.other = User.objects.create_user(username="cand2", password="pass", role="candidate", email="cand2@example.com")
        self.headers = {"HTTP_AUTHORIZATION": f"Bearer {issue_token(self.user)}"}

    def test_lists_only_own_notifications(self):
        Notification.objects.create(user=self.user, message="first")
        Notification.objects.create(user=self.user, message="second")
        Notification.objects.create(user=self.other, message="not yours")

        resp = self.client.get(reverse("notifications_list"), **self.headers)
        self.assertEqual(resp.status_code, 200)
        messages = [n["message"] for n in resp.json()["notifications"]]
        self.assertEqual(messages, ["second", "first"])

    def test_read_and_update_preferences(self):
        resp = self.client.get(reverse("notification_preferences"), **self.headers)
        self.assertEqual(resp.json(), {"notificationPreferences": {"newJobPosts": False}})

        resp = self.client.patch(
            reverse("notification_preferences"),
            data=json.dumps({"notificationPreferences": {"newJobPosts": True}}),
            content_type="application/json",
            **self.headers,
        )
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["notificationPreferences"], {"newJobPosts": True})
        self.user.refresh_from_db()
        self.assertTrue(self.user.notify_new_job_posts)

    def test_preferences_reject_non_boolean(self):
        resp = self.client.patch(
            reverse("notification_preferences"),
            data=json.dumps({"notificationPreferences": {"newJobPosts": "yes"}}),
            content_type="application/json",
            **self.headers,
        )
        self.assertEqual(resp.status_code, 400)
        self.user.refresh_from_db()
        self.assertFalse(self.user.notify_new_job_posts)
