from django.contrib import admin

from .models import Job, Application, SavedJob


@admin.register(Job)
class JobAdmin(admin.ModelAdmin):
    list_display = ("title", "company", "location", "job_type", "experience_level", "status", "recruiter", "created_at")
    list_filter = ("status", "job_type", "experience_level")
    search_fields = ("title", "company", "location")


@admin.register(Application)
class ApplicationAdmin(admin.ModelAdmin):
    list_display = ("id", "job_id", "candidate", "status", "created_at")
    list_filter = ("status",)


admin.site.register(SavedJob)
