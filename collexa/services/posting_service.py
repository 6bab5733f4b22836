"""
Posting Service - job and internship postings.

Both kinds share one implementation, parametrised by POSTING_KINDS. A posting
references a company document and records who posted it; only that principal
or an admin may change or remove it.
"""

import logging
from typing import Any, Dict, List

from pymongo.database import Database

from collexa.core.auth import Principal
from collexa.core.errors import Forbidden, NotFound, PostingNotFound
from collexa.db.mongodb import COLLECTIONS
from collexa.services.mongo_service import CollectionService, to_object_id

logger = logging.getLogger(__name__)

POSTING_KINDS = {
    "job": {"collection": COLLECTIONS["jobs"], "label": "Job"},
    "internship": {"collection": COLLECTIONS["internships"], "label": "Internship"},
}


class PostingService(CollectionService):
    def __init__(self, db: Database, kind: str):
        config = POSTING_KINDS[kind]
        self.kind = kind
        self.label = config["label"]
        self.collection_name = config["collection"]
        self.not_found_message = f"{self.label} not found"
        super().__init__(db)
        self.companies = db[COLLECTIONS["companies"]]

    def _not_found(self) -> NotFound:
        return PostingNotFound(self.not_found_message)

    def _company_id(self, company_id: Any):
        oid = to_object_id(company_id)
        if oid is None or not self.companies.find_one({"_id": oid}, {"_id": 1}):
            raise NotFound("Company not found")
        return oid

    def with_companies(self, postings: List[dict]) -> List[dict]:
        """Replace each posting's company id with the company document."""
        ids = {p.get("company") for p in postings if p.get("company") is not None}
        companies = {c["_id"]: c for c in self.companies.find({"_id": {"$in": list(ids)}})}
        return [{**p, "company": companies.get(p.get("company"), p.get("company"))} for p in postings]

    def _check_owner(self, posting: dict, principal: Principal) -> None:
        owner = posting.get("posted_by") or {}
        if principal.is_admin or owner.get("id") == principal.id:
            return
        raise Forbidden(f"Only the owner can modify this {self.kind}")

    # ------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------

    def create_posting(self, data: Dict[str, Any], principal: Principal) -> dict:
        data = dict(data)
        data["company"] = self._company_id(data["company"])
        data["posted_by"] = {"id": principal.id, "role": principal.role}
        posting = self.create(data)
        logger.info("%s %s created by %s", self.label, posting["_id"], principal.id)
        return self.with_companies([posting])[0]

    def list_active(self) -> List[dict]:
        return self.with_companies(self.list({"is_active": True}))

    def get_posting(self, posting_id: Any) -> dict:
        return self.with_companies([self.get(posting_id)])[0]

    def update_posting(self, posting_id: Any, changes: Dict[str, Any], principal: Principal) -> dict:
        posting = self.get(posting_id)
        self._check_owner(posting, principal)
        if changes.get("company") is not None:
            changes["company"] = self._company_id(changes["company"])
        else:
            changes.pop("company", None)
        changes.pop("posted_by", None)
        updated = self.update(posting["_id"], changes)
        return self.with_companies([updated])[0]

    def delete_posting(self, posting_id: Any, principal: Principal) -> None:
        posting = self.get(posting_id)
        self._check_owner(posting, principal)
        self.delete(posting["_id"])
        logger.info("%s %s deleted by %s", self.label, posting["_id"], principal.id)

    def exists(self, posting_id: Any) -> bool:
        oid = to_object_id(posting_id)
        return oid is not None and self.collection.find_one({"_id": oid}, {"_id": 1}) is not None

    def find_by_ids(self, ids) -> Dict[Any, dict]:
        docs = self.collection.find({"_id": {"$in": list(ids)}})
        return {d["_id"]: d for d in self.with_companies(list(docs))}
