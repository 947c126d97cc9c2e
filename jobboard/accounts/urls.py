from django.urls import path
from . import views

urlpatterns = [
    path("token", views.obtain_token, name="obtain_token"),
    path("notifications", views.notifications_list, name="notifications_list"),
    path("preferences", views.notification_preferences, name="notification_preferences"),
]
