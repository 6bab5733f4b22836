"""
Internship Routes

POST /internships - Create internship (admin, employer or company)
GET /internships - List active internships with company details
GET /internships/{internship_id} - Get internship details
PATCH /internships/{internship_id} - Update internship (poster or admin)
DELETE /internships/{internship_id} - Delete internship (poster or admin)
"""

from fastapi import APIRouter, Depends

from collexa.api.deps import get_internship_service
from collexa.core.auth import Principal, require_roles
from collexa.core.security import ADMIN_ROLE
from collexa.schemas.schemas import InternshipCreate, InternshipUpdate, MessageResponse
from collexa.services.mongo_service import serialize_doc, serialize_docs
from collexa.services.posting_service import PostingService

router = APIRouter(prefix="/internships", tags=["Internships"])

require_poster = require_roles(ADMIN_ROLE, "employer", "company")


@router.post("", status_code=201)
async def create_internship(
    internship: InternshipCreate,
    principal: Principal = Depends(require_poster),
    internships: PostingService = Depends(get_internship_service),
):
    created = internships.create_posting(internship.model_dump(), principal)
    return {"success": True, "message": "Internship created successfully", "internship": serialize_doc(created)}


@router.get("")
async def list_internships(internships: PostingService = Depends(get_internship_service)):
    items = internships.list_active()
    return {"success": True, "count": len(items), "internships": serialize_docs(items)}


@router.get("/{internship_id}")
async def get_internship(internship_id: str, internships: PostingService = Depends(get_internship_service)):
    return {"success": True, "internship": serialize_doc(internships.get_posting(internship_id))}


@router.patch("/{internship_id}")
async def update_internship(
    internship_id: str,
    changes: InternshipUpdate,
    principal: Principal = Depends(require_poster),
    internships: PostingService = Depends(get_internship_service),
):
    updated = internships.update_posting(internship_id, changes.model_dump(exclude_unset=True), principal)
    return {"success": True, "message": "Internship updated successfully", "internship": serialize_doc(updated)}


@router.delete("/{internship_id}", response_model=MessageResponse)
async def delete_internship(
    internship_id: str,
    principal: Principal = Depends(require_poster),
    internships: PostingService = Depends(get_internship_service),
):
    internships.delete_posting(internship_id, principal)
    return MessageResponse(message="Internship deleted successfully")
