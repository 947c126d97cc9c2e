from django.urls import path
from . import views

urlpatterns = [
    path("jobs", views.job_collection, name="job_collection"),
    path("jobs/search", views.job_search, name="job_search"),
    path("jobs/<int:job_id>", views.job_detail, name="job_detail"),
    path("jobs/<int:job_id>/apply", views.apply_job, name="apply_job"),
    path("jobs/<int:job_id>/applications", views.job_applications, name="job_applications"),
    path(
        "jobs/<int:job_id>/applications/<int:application_id>/respond",
        views.respond_application,
        name="respond_application",
    ),
    path("jobs/<int:job_id>/status", views.job_status, name="job_status"),
    path("jobs/<int:job_id>/bookmark", views.toggle_bookmark, name="toggle_bookmark"),
]
