"""
Service providers for route injection.

Each request builds its services from the shared database handle and the
frozen settings, so tests can swap either through app.dependency_overrides.
"""

from fastapi import Depends
from pymongo.database import Database

from collexa.core.config import Settings, get_settings
from collexa.db.mongodb import get_mongo_db
from collexa.services.application_service import ApplicationWorkflow
from collexa.services.content_service import (
    BlogService, CampusCourseService, CertificateCourseService, CompanyService,
)
from collexa.services.lead_service import LeadService
from collexa.services.posting_service import PostingService
from collexa.services.user_service import UserService


def get_user_service(db: Database = Depends(get_mongo_db),
                     settings: Settings = Depends(get_settings)) -> UserService:
    return UserService(db, settings)


def get_job_service(db: Database = Depends(get_mongo_db)) -> PostingService:
    return PostingService(db, "job")


def get_internship_service(db: Database = Depends(get_mongo_db)) -> PostingService:
    return PostingService(db, "internship")


def get_job_applications(db: Database = Depends(get_mongo_db)) -> ApplicationWorkflow:
    return ApplicationWorkflow(db, "job")


def get_internship_applications(db: Database = Depends(get_mongo_db)) -> ApplicationWorkflow:
    return ApplicationWorkflow(db, "internship")


def get_company_service(db: Database = Depends(get_mongo_db)) -> CompanyService:
    return CompanyService(db)


def get_blog_service(db: Database = Depends(get_mongo_db)) -> BlogService:
    return BlogService(db)


def get_campus_course_service(db: Database = Depends(get_mongo_db)) -> CampusCourseService:
    return CampusCourseService(db)


def get_certificate_course_service(db: Database = Depends(get_mongo_db)) -> CertificateCourseService:
    return CertificateCourseService(db)


def get_campus_leads(db: Database = Depends(get_mongo_db)) -> LeadService:
    return LeadService(db, "campus")


def get_certificate_leads(db: Database = Depends(get_mongo_db)) -> LeadService:
    return LeadService(db, "certificate")


def get_contact_service(db: Database = Depends(get_mongo_db)) -> LeadService:
    return LeadService(db, "contact")
