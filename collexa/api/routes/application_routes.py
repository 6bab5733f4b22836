"""
Application Routes

Jobs (/applications) and internships (/internship-applications) share one
router factory; only the workflow kind and the admin listing path differ.

POST /{prefix}/apply/{posting_id} - Apply with form fields and resume (multipart)
GET /{prefix}/my-applications - Own applications with posting and company
GET /{prefix}/job-applications/{job_id} - Applications of a job (admin only)
GET /{prefix}/internship-applications/{internship_id} - Same for internships (admin only)
PATCH /{prefix}/status/{application_id} - Move application status (admin only)
"""

from typing import Callable, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from collexa.api.deps import get_internship_applications, get_job_applications
from collexa.core.auth import Principal, require_admin, require_user
from collexa.core.config import Settings, get_settings
from collexa.schemas.schemas import ApplicationStatusUpdate
from collexa.services.application_service import ApplicationWorkflow
from collexa.services.mongo_service import serialize_doc, serialize_docs
from collexa.utils.file_upload import store_resume


def build_application_router(prefix: str, tag: str, kind: str, listing_path: str,
                             get_workflow: Callable) -> APIRouter:
    router = APIRouter(prefix=prefix, tags=[tag])
    label = kind.capitalize()

    @router.post("/apply/{posting_id}", status_code=201)
    async def apply(
        posting_id: str,
        full_name: Optional[str] = Form(None),
        email: Optional[str] = Form(None),
        phone_number: Optional[str] = Form(None),
        why_hire_you: Optional[str] = Form(None),
        resume: Optional[UploadFile] = File(None),
        principal: Principal = Depends(require_user),
        workflow: ApplicationWorkflow = Depends(get_workflow),
        settings: Settings = Depends(get_settings),
    ):
        """
        Apply to a posting.

        The resume (PDF/DOC/DOCX, max 2MB) is stored first; any later failure
        removes it again.
        """
        resume_path = await store_resume(resume, settings)
        form = {
            "full_name": full_name,
            "email": email,
            "phone_number": phone_number,
            "why_hire_you": why_hire_you,
        }
        application = workflow.apply(posting_id, principal, form, resume_path)
        return {
            "success": True,
            "message": f"{label} application submitted successfully",
            "application": serialize_doc(application),
        }

    @router.get("/my-applications")
    async def my_applications(
        principal: Principal = Depends(require_user),
        workflow: ApplicationWorkflow = Depends(get_workflow),
    ):
        applications = workflow.list_mine(principal)
        return {"success": True, "count": len(applications), "applications": serialize_docs(applications)}

    @router.get(listing_path + "/{posting_id}")
    async def posting_applications(
        posting_id: str,
        principal: Principal = Depends(require_admin),
        workflow: ApplicationWorkflow = Depends(get_workflow),
    ):
        applications = workflow.list_for_posting(posting_id)
        return {"success": True, "count": len(applications), "applications": serialize_docs(applications)}

    @router.patch("/status/{application_id}")
    async def update_status(
        application_id: str,
        body: ApplicationStatusUpdate,
        principal: Principal = Depends(require_admin),
        workflow: ApplicationWorkflow = Depends(get_workflow),
    ):
        application = workflow.update_status(application_id, body.status)
        return {
            "success": True,
            "message": "Application status updated successfully",
            "application": serialize_doc(application),
        }

    return router


job_application_router = build_application_router(
    "/applications", "Job Applications", "job", "/job-applications", get_job_applications,
)

internship_application_router = build_application_router(
    "/internship-applications", "Internship Applications", "internship",
    "/internship-applications", get_internship_applications,
)
