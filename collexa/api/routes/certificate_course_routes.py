"""
Certificate Course Routes

POST /certificatecourses - Create course (admin only)
GET /certificatecourses - List courses
POST /certificatecourses/lead - Submit an enrolment enquiry (public)
GET /certificatecourses/leads - List enquiries (admin only)
DELETE /certificatecourses/leads/{lead_id} - Delete an enquiry (admin only)
GET /certificatecourses/{course_id} - Get course details
PATCH /certificatecourses/{course_id} - Update course (admin only)
DELETE /certificatecourses/{course_id} - Delete course (admin only)
"""

from fastapi import APIRouter, Depends

from collexa.api.deps import get_certificate_course_service, get_certificate_leads
from collexa.core.auth import Principal, require_admin
from collexa.schemas.schemas import (
    CertificateCourseCreate, CertificateCourseUpdate, CertificateLeadCreate, MessageResponse,
)
from collexa.services.content_service import CertificateCourseService
from collexa.services.lead_service import LeadService
from collexa.services.mongo_service import serialize_doc, serialize_docs

router = APIRouter(prefix="/certificatecourses", tags=["Certificate Courses"])


@router.post("", status_code=201)
async def create_course(
    data: CertificateCourseCreate,
    principal: Principal = Depends(require_admin),
    courses: CertificateCourseService = Depends(get_certificate_course_service),
):
    course = courses.create(data.model_dump())
    return {"success": True, "message": "Course created successfully", "course": serialize_doc(course)}


@router.get("")
async def list_courses(courses: CertificateCourseService = Depends(get_certificate_course_service)):
    items = courses.list()
    return {"success": True, "count": len(items), "courses": serialize_docs(items)}


@router.post("/lead", status_code=201)
async def submit_lead(data: CertificateLeadCreate, leads: LeadService = Depends(get_certificate_leads)):
    lead = leads.submit(data.model_dump())
    return {"success": True, "message": "Thank you! We will contact you soon.", "lead": serialize_doc(lead)}


@router.get("/leads")
async def list_leads(
    principal: Principal = Depends(require_admin),
    leads: LeadService = Depends(get_certificate_leads),
):
    items = leads.list()
    return {"success": True, "count": len(items), "leads": serialize_docs(items)}


@router.delete("/leads/{lead_id}", response_model=MessageResponse)
async def delete_lead(
    lead_id: str,
    principal: Principal = Depends(require_admin),
    leads: LeadService = Depends(get_certificate_leads),
):
    leads.delete(lead_id)
    return MessageResponse(message="Lead deleted successfully")


@router.get("/{course_id}")
async def get_course(course_id: str, courses: CertificateCourseService = Depends(get_certificate_course_service)):
    return {"success": True, "course": serialize_doc(courses.get(course_id))}


@router.patch("/{course_id}")
async def update_course(
    course_id: str,
    changes: CertificateCourseUpdate,
    principal: Principal = Depends(require_admin),
    courses: CertificateCourseService = Depends(get_certificate_course_service),
):
    course = courses.update(course_id, changes.model_dump(exclude_unset=True))
    return {"success": True, "message": "Course updated successfully", "course": serialize_doc(course)}


@router.delete("/{course_id}", response_model=MessageResponse)
async def delete_course(
    course_id: str,
    principal: Principal = Depends(require_admin),
    courses: CertificateCourseService = Depends(get_certificate_course_service),
):
    courses.delete(course_id)
    return MessageResponse(message="Course deleted successfully")
