from django.contrib import admin
from django.contrib.auth.admin import UserAdmin as DjangoUserAdmin

from .models import User, Notification


@admin.register(User)
class UserAdmin(DjangoUserAdmin):
    # show extra fields in admin
    fieldsets = DjangoUserAdmin.fieldsets + (
        ("JobBoard", {"fields": ("role", "notify_new_job_posts")}),
    )
    list_display = ("username", "email", "role", "notify_new_job_posts", "is_active", "is_staff")
    list_filter = ("role", "notify_new_job_posts", "is_active")


@admin.register(Notification)
class NotificationAdmin(admin.ModelAdmin):
    list_display = ("user", "message", "is_read", "created_at")
    list_filter = ("is_read",)
    search_fields = ("message", "user__username")
