"""
Application Workflow - apply to postings, list applications, move status.

apply() runs its checks in a fixed order: resume present, form fields (all
errors reported together), posting exists, no earlier application, insert.
The resume is already on disk when apply() is called; every failure after
that point deletes it, so a stored resume is always referenced by exactly one
application.

Duplicates are pre-checked for a friendly message, but the unique index on
(posting, user) is what actually guarantees one application per pair; its
DuplicateKeyError is reported as the same DuplicateApplication.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError
from pymongo import DESCENDING, ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from collexa.core.auth import Principal
from collexa.core.errors import (
    DuplicateApplication, InvalidStatus, MissingResume, NotFound, PostingNotFound,
    ValidationError, pydantic_errors_to_fields,
)
from collexa.db.mongodb import COLLECTIONS
from collexa.schemas.schemas import ApplicationForm, ApplicationStatus
from collexa.services.mongo_service import to_object_id
from collexa.services.posting_service import PostingService
from collexa.utils.file_upload import discard_file

logger = logging.getLogger(__name__)

APPLICATION_KINDS = {
    "job": {"collection": COLLECTIONS["applications"], "posting_field": "job"},
    "internship": {"collection": COLLECTIONS["internship_applications"], "posting_field": "internship"},
}

VALID_STATUSES = [s.value for s in ApplicationStatus]

APPLICANT_FIELDS = {"first_name": 1, "last_name": 1, "email": 1, "phone_number": 1, "profile": 1}


def validate_application_form(form: Dict[str, Any]) -> ApplicationForm:
    try:
        return ApplicationForm.model_validate(form)
    except PydanticValidationError as e:
        raise ValidationError(pydantic_errors_to_fields(e.errors()))


class ApplicationWorkflow:
    def __init__(self, db: Database, kind: str):
        config = APPLICATION_KINDS[kind]
        self.kind = kind
        self.collection = db[config["collection"]]
        self.posting_field = config["posting_field"]
        self.postings = PostingService(db, kind)
        self.users = db[COLLECTIONS["users"]]

    def apply(self, posting_id: Any, applicant: Principal, form: Dict[str, Any],
              resume_path: Optional[str]) -> dict:
        if not resume_path:
            raise MissingResume()

        try:
            fields = validate_application_form(form)

            posting_oid = to_object_id(posting_id)
            if posting_oid is None or not self.postings.exists(posting_oid):
                raise PostingNotFound(f"{self.postings.label} not found")

            applicant_oid = to_object_id(applicant.id)
            key = {self.posting_field: posting_oid, "user": applicant_oid}
            if self.collection.find_one(key, {"_id": 1}):
                raise DuplicateApplication(f"You have already applied for this {self.kind}")

            now = datetime.utcnow()
            application = {
                **key,
                "full_name": fields.full_name,
                "email": fields.email,
                "phone_number": fields.phone_number,
                "cover_letter": fields.why_hire_you,
                "resume_url": resume_path,
                "status": ApplicationStatus.applied.value,
                "created_at": now,
                "updated_at": now,
            }
            try:
                result = self.collection.insert_one(application)
            except DuplicateKeyError:
                raise DuplicateApplication(f"You have already applied for this {self.kind}")
        except Exception:
            discard_file(resume_path)
            raise

        application["_id"] = result.inserted_id
        logger.info("User %s applied to %s %s", applicant.id, self.kind, posting_oid)
        return application

    def list_mine(self, principal: Principal) -> List[dict]:
        """The principal's own applications with posting and company attached."""
        applications = list(
            self.collection.find({"user": to_object_id(principal.id)}).sort("created_at", DESCENDING)
        )
        postings = self.postings.find_by_ids({a[self.posting_field] for a in applications})
        return [
            {**a, self.posting_field: postings.get(a[self.posting_field], a[self.posting_field])}
            for a in applications
        ]

    def list_for_posting(self, posting_id: Any) -> List[dict]:
        """All applications of one posting with an applicant summary attached."""
        posting = self.postings.get(posting_id)
        applications = list(
            self.collection.find({self.posting_field: posting["_id"]}).sort("created_at", DESCENDING)
        )
        user_ids = [a["user"] for a in applications]
        applicants = {u["_id"]: u for u in self.users.find({"_id": {"$in": user_ids}}, APPLICANT_FIELDS)}
        summary = {"_id": posting["_id"], "title": posting.get("title")}
        return [
            {**a, "user": applicants.get(a["user"], a["user"]), self.posting_field: summary}
            for a in applications
        ]

    def update_status(self, application_id: Any, new_status: Any) -> dict:
        # Any status may move to any other; only the value itself is checked
        if new_status not in VALID_STATUSES:
            raise InvalidStatus()

        oid = to_object_id(application_id)
        application = None
        if oid is not None:
            application = self.collection.find_one_and_update(
                {"_id": oid},
                {"$set": {"status": new_status, "updated_at": datetime.utcnow()}},
                return_document=ReturnDocument.AFTER,
            )
        if not application:
            raise NotFound("Application not found")
        logger.info("Application %s moved to %s", oid, new_status)
        return application
