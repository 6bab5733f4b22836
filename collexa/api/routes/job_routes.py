"""
Job Routes

POST /jobs - Create job posting (admin, employer or company)
GET /jobs - List active jobs with company details
GET /jobs/{job_id} - Get job details
PATCH /jobs/{job_id} - Update job (poster or admin)
DELETE /jobs/{job_id} - Delete job (poster or admin)
"""

from fastapi import APIRouter, Depends

from collexa.api.deps import get_job_service
from collexa.core.auth import Principal, require_roles
from collexa.core.security import ADMIN_ROLE
from collexa.schemas.schemas import JobCreate, JobUpdate, MessageResponse
from collexa.services.mongo_service import serialize_doc, serialize_docs
from collexa.services.posting_service import PostingService

router = APIRouter(prefix="/jobs", tags=["Jobs"])

require_poster = require_roles(ADMIN_ROLE, "employer", "company")


@router.post("", status_code=201)
async def create_job(
    job: JobCreate,
    principal: Principal = Depends(require_poster),
    jobs: PostingService = Depends(get_job_service),
):
    """Create a new job posting for an existing company."""
    created = jobs.create_posting(job.model_dump(), principal)
    return {"success": True, "message": "Job created successfully", "job": serialize_doc(created)}


@router.get("")
async def list_jobs(jobs: PostingService = Depends(get_job_service)):
    """Public listing, newest first."""
    items = jobs.list_active()
    return {"success": True, "count": len(items), "jobs": serialize_docs(items)}


@router.get("/{job_id}")
async def get_job(job_id: str, jobs: PostingService = Depends(get_job_service)):
    return {"success": True, "job": serialize_doc(jobs.get_posting(job_id))}


@router.patch("/{job_id}")
async def update_job(
    job_id: str,
    changes: JobUpdate,
    principal: Principal = Depends(require_poster),
    jobs: PostingService = Depends(get_job_service),
):
    updated = jobs.update_posting(job_id, changes.model_dump(exclude_unset=True), principal)
    return {"success": True, "message": "Job updated successfully", "job": serialize_doc(updated)}


@router.delete("/{job_id}", response_model=MessageResponse)
async def delete_job(
    job_id: str,
    principal: Principal = Depends(require_poster),
    jobs: PostingService = Depends(get_job_service),
):
    jobs.delete_posting(job_id, principal)
    return MessageResponse(message="Job deleted successfully")
