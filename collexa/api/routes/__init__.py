"""
API Routes - Combines all route modules into single router.
"""

from fastapi import APIRouter

from collexa.api.routes.auth_routes import router as auth_router
from collexa.api.routes.user_routes import router as user_router
from collexa.api.routes.admin_routes import router as admin_router
from collexa.api.routes.job_routes import router as job_router
from collexa.api.routes.internship_routes import router as internship_router
from collexa.api.routes.application_routes import job_application_router, internship_application_router
from collexa.api.routes.company_routes import router as company_router
from collexa.api.routes.blog_routes import router as blog_router
from collexa.api.routes.campus_course_routes import router as campus_course_router
from collexa.api.routes.certificate_course_routes import router as certificate_course_router
from collexa.api.routes.contact_routes import router as contact_router

# Main API router
api_router = APIRouter()

# Include all sub-routers
api_router.include_router(auth_router)
api_router.include_router(user_router)
api_router.include_router(admin_router)
api_router.include_router(job_router)
api_router.include_router(internship_router)
api_router.include_router(job_application_router)
api_router.include_router(internship_application_router)
api_router.include_router(company_router)
api_router.include_router(blog_router)
api_router.include_router(campus_course_router)
api_router.include_router(certificate_course_router)
api_router.include_router(contact_router)
