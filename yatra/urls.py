from django.urls import path, include
from . import views
from .admin_api import AdminSubmissionViewSet, router as admin_router

# older clients post to admin/form/<id>/approve|reject
legacy_approve = AdminSubmissionViewSet.as_view({"post": "approve"})
legacy_reject = AdminSubmissionViewSet.as_view({"post": "reject"})

urlpatterns = [
    path("health/", views.health, name="health"),
    path("auth/register", views.register, name="register"),
    path("auth/login", views.login, name="login"),
    path("form/schema", views.form_schema, name="form_schema"),
    path("form/submit", views.submit_form, name="submit_form"),
    path("form/my-submissions", views.my_submissions, name="my_submissions"),
    path("form/<str:submission_id>", views.get_submission, name="submission_detail"),
    path("form/<str:submission_id>/download", views.download_submission, name="submission_download"),
    path("storage/files/<str:file_id>/view", views.storage_view, name="storage_view"),
    path("admin/form/<str:pk>/approve", legacy_approve, name="admin_form_approve"),
    path("admin/form/<str:pk>/reject", legacy_reject, name="admin_form_reject"),
    path("admin/", include(admin_router.urls)),
]
