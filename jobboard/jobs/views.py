from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_http_methods

from accounts.decorators import token_required
from jobboard.api import api_view, json_body
from . import services


# -----------------------------
# Jobs
# -----------------------------
@csrf_exempt
@require_http_methods(["GET", "POST"])
@api_view
def job_collection(request):
    if request.method == "POST":
        return _create_job(request)
    jobs = services.list_jobs()
    return JsonResponse([job.to_dict() for job in jobs], safe=False)


@token_required
def _create_job(request):
    job = services.create_job(json_body(request), request.requester)
    return JsonResponse({"message": "Job created successfully", "job": job.to_dict()}, status=201)


@csrf_exempt
@require_http_methods(["GET", "PUT", "DELETE"])
@api_view
def job_detail(request, job_id):
    if request.method == "PUT":
        return _update_job(request, job_id)
    if request.method == "DELETE":
        return _delete_job(request, job_id)
    job = services.get_job(job_id)
    return JsonResponse({"job": job.to_dict()})


@token_required
def _update_job(request, job_id):
    patch = services.JobPatch.from_payload(json_body(request))
    job = services.update_job(job_id, patch, request.requester)
    return JsonResponse({"message": "Job updated successfully", "job": job.to_dict()})


@token_required
def _delete_job(request, job_id):
    services.delete_job(job_id, request.requester)
    return JsonResponse({"message": "Job deleted successfully"})


@require_http_methods(["GET"])
@api_view
def job_search(request):
    jobs = services.search_jobs(
        request.GET.get("q", ""),
        job_type=request.GET.get("jobType"),
        experience_level=request.GET.get("experienceLevel"),
        location=request.GET.get("location"),
    )
    return JsonResponse({"results": [job.to_dict() for job in jobs]})


@csrf_exempt
@require_http_methods(["PATCH"])
@api_view
@token_required
def job_status(request, job_id):
    status = json_body(request).get("status")
    job = services.set_job_status(job_id, status, request.requester)
    return JsonResponse({"message": f"Job status updated to {job.status}", "job": job.to_dict()})


@csrf_exempt
@require_http_methods(["POST"])
@api_view
@token_required
def toggle_bookmark(request, job_id):
    saved = services.toggle_bookmark(job_id, request.requester)
    message = "Job bookmarked" if saved else "Bookmark removed"
    return JsonResponse({"message": message, "bookmarked": saved})


# -----------------------------
# Applications
# -----------------------------
@csrf_exempt
@require_http_methods(["POST"])
@api_view
@token_required
def apply_job(request, job_id):
    payload = json_body(request)
    application = services.apply_to_job(
        job_id,
        request.requester,
        resume=payload.get("resume") or "",
        cover_letter=payload.get("coverLetter") or "",
    )
    return JsonResponse(
        {"message": "Application submitted successfully", "application": application.to_dict()},
        status=201,
    )


@require_http_methods(["GET"])
@api_view
@token_required
def job_applications(request, job_id):
    job, applications = services.list_applications(job_id, request.requester)
    return JsonResponse(
        {
            "jobTitle": job.title,
            "applications": [app.to_dict(with_candidate=True) for app in applications],
        }
    )


@csrf_exempt
@require_http_methods(["PATCH"])
@api_view
@token_required
def respond_application(request, job_id, application_id):
    action = json_body(request).get("action")
    application, notification = services.respond_to_application(job_id, application_id, action, request.requester)
    return JsonResponse(
        {
            "message": f"Application {application.status}",
            "application": application.to_dict(),
            "notification": notification.to_dict() if notification else None,
        }
    )
