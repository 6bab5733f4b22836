"""
Lead/Contact Intake - public interest-capture forms.

A second submission with the same (email, subject-of-interest) pair gets a
friendly "already submitted" answer. The pre-check produces that message in
the common case; the unique index on the pair turns a concurrent duplicate
into the same DuplicateLead instead of a raw storage error.
"""

import logging
from typing import Any, Dict

from pymongo.database import Database

from collexa.core.errors import DuplicateLead
from collexa.db.mongodb import COLLECTIONS
from collexa.schemas.schemas import ContactStatus
from collexa.services.mongo_service import CollectionService, to_object_id

logger = logging.getLogger(__name__)

LEAD_KINDS = {
    "campus": {
        "collection": COLLECTIONS["campus_leads"],
        "subject_field": "course",
        "duplicate_message": "You have already submitted an enquiry for this course. We will contact you soon.",
        "not_found_message": "Lead not found",
    },
    "certificate": {
        "collection": COLLECTIONS["certificate_leads"],
        "subject_field": "course_name",
        "duplicate_message": "You have already submitted an enquiry for this course. We will contact you soon.",
        "not_found_message": "Lead not found",
    },
    "contact": {
        "collection": COLLECTIONS["contacts"],
        "subject_field": "subject",
        "duplicate_message": "You have already sent us a message about this. We will contact you soon.",
        "not_found_message": "Message not found",
    },
}


class LeadService(CollectionService):
    duplicate_error = DuplicateLead

    def __init__(self, db: Database, kind: str):
        config = LEAD_KINDS[kind]
        self.kind = kind
        self.collection_name = config["collection"]
        self.subject_field = config["subject_field"]
        self.duplicate_message = config["duplicate_message"]
        self.not_found_message = config["not_found_message"]
        super().__init__(db)

    def submit(self, data: Dict[str, Any]) -> dict:
        data = dict(data)
        data["email"] = data["email"].strip().lower()

        if self.kind == "campus":
            data["source"] = "website_lead_form"
        elif self.kind == "certificate" and data.get("course_id"):
            data["course_id"] = to_object_id(data["course_id"])
        elif self.kind == "contact":
            data["status"] = ContactStatus.new.value

        key = {"email": data["email"], self.subject_field: data.get(self.subject_field)}
        if self.collection.find_one(key, {"_id": 1}):
            raise DuplicateLead(self.duplicate_message)

        lead = self.create(data)
        logger.info("New %s lead %s", self.kind, lead["_id"])
        return lead

    def set_status(self, lead_id: Any, status: ContactStatus) -> dict:
        return self.update(lead_id, {"status": status})
