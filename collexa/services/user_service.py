"""
User Service - the credential store.

Users are stored with a bcrypt hash of their password; the hash is written
only on registration, password change and password reset. Emails are stored
lower-case and backed by a unique index.
"""

import logging
import re
from datetime import datetime, timedelta
from typing import List, Optional, Tuple

from pymongo import DESCENDING, ReturnDocument
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from collexa.core.config import Settings
from collexa.core.errors import (
    AccountDisabled, EmailAlreadyRegistered, NotFound, Unauthenticated, ValidationError,
)
from collexa.core.security import generate_otp, hash_otp, hash_password, verify_password
from collexa.db.mongodb import COLLECTIONS
from collexa.schemas.schemas import (
    PROFILE_FIELDS, ROOT_PROFILE_FIELDS, CompanyRegisterRequest, RegisterRequest,
)
from collexa.services.mongo_service import serialize_doc, to_mongo, to_object_id

logger = logging.getLogger(__name__)

DEFAULT_PROFILE_PICTURE = "https://img.freepik.com/free-vector/blue-circle-with-white-user_78370-4707.jpg"

PRIVATE_FIELDS = ("password_hash", "reset_otp_hash", "reset_otp_expires")


def default_profile() -> dict:
    return {"skills": [], "profile_picture": DEFAULT_PROFILE_PICTURE}


def public_user(user: Optional[dict]) -> Optional[dict]:
    """Serialize a user without credentials."""
    if user is None:
        return None
    return serialize_doc({k: v for k, v in user.items() if k not in PRIVATE_FIELDS})


class UserService:
    def __init__(self, db: Database, settings: Settings):
        self.collection = db[COLLECTIONS["users"]]
        self.settings = settings

    # ------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------

    def get_by_email(self, email: str) -> Optional[dict]:
        return self.collection.find_one({"email": email.strip().lower()})

    def get_by_id(self, user_id) -> dict:
        oid = to_object_id(user_id)
        user = self.collection.find_one({"_id": oid}) if oid else None
        if not user:
            raise NotFound("User not found")
        return user

    # ------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------

    def _insert(self, doc: dict) -> dict:
        if self.get_by_email(doc["email"]):
            raise EmailAlreadyRegistered()
        now = datetime.utcnow()
        doc.update({"is_active": True, "created_at": now, "updated_at": now})
        try:
            result = self.collection.insert_one(doc)
        except DuplicateKeyError:
            # Lost the race against a concurrent registration
            raise EmailAlreadyRegistered()
        doc["_id"] = result.inserted_id
        logger.info("Registered %s user %s", doc["role"], doc["_id"])
        return doc

    def register(self, data: RegisterRequest) -> dict:
        return self._insert({
            "first_name": data.first_name,
            "last_name": data.last_name,
            "email": data.email.lower(),
            "phone_number": data.phone_number,
            "password_hash": hash_password(data.password),
            "role": data.role.value,
            "job_type": data.job_type.value,
            "profile": default_profile(),
        })

    def register_company(self, data: CompanyRegisterRequest) -> dict:
        # Owner name "Jane Mary Doe" -> first "Jane", last "Mary Doe"
        name_parts = data.owner_full_name.split()
        first_name = name_parts[0]
        last_name = " ".join(name_parts[1:]) or "."

        details = data.model_dump(exclude={"owner_full_name", "owner_email", "password"})
        try:
            return self._insert({
                "first_name": first_name,
                "last_name": last_name,
                "email": data.owner_email.lower(),
                "phone_number": data.company_phone,
                "password_hash": hash_password(data.password),
                "role": "company",
                "job_type": "job",
                "company_details": to_mongo(details),
                "profile": default_profile(),
            })
        except EmailAlreadyRegistered:
            raise EmailAlreadyRegistered("Owner email already registered")

    # ------------------------------------------------------------
    # Login / passwords
    # ------------------------------------------------------------

    def authenticate(self, email: str, password: str) -> dict:
        user = self.get_by_email(email)
        if not user or not verify_password(password, user.get("password_hash")):
            raise Unauthenticated("Invalid email or password")
        if user.get("is_active") is False:
            raise AccountDisabled()
        return user

    def change_password(self, user: dict, current_password: str, new_password: str) -> None:
        if not verify_password(current_password, user.get("password_hash")):
            raise ValidationError(
                [{"field": "current_password", "message": "Current password is incorrect"}],
                message="Current password is incorrect",
            )
        self._set_password(user["_id"], new_password)

    def _set_password(self, user_id, password: str) -> None:
        self.collection.update_one(
            {"_id": user_id},
            {
                "$set": {"password_hash": hash_password(password), "updated_at": datetime.utcnow()},
                "$unset": {"reset_otp_hash": "", "reset_otp_expires": ""},
            },
        )

    def start_password_reset(self, email: str) -> Tuple[dict, str]:
        """Store a hashed one-time code on the user and return the plain code."""
        user = self.get_by_email(email)
        if not user:
            raise NotFound("User not found")

        otp = generate_otp()
        expires = datetime.utcnow() + timedelta(minutes=self.settings.reset_otp_expire_minutes)
        self.collection.update_one(
            {"_id": user["_id"]},
            {"$set": {"reset_otp_hash": hash_otp(otp), "reset_otp_expires": expires}},
        )
        return user, otp

    def clear_password_reset(self, user_id) -> None:
        self.collection.update_one(
            {"_id": user_id}, {"$unset": {"reset_otp_hash": "", "reset_otp_expires": ""}}
        )

    def reset_password(self, email: str, otp: str, new_password: str) -> None:
        user = self.collection.find_one({
            "email": email.strip().lower(),
            "reset_otp_hash": hash_otp(otp),
            "reset_otp_expires": {"$gt": datetime.utcnow()},
        })
        if not user:
            raise ValidationError(
                [{"field": "otp", "message": "Invalid or expired code"}],
                message="Invalid or expired code",
            )
        self._set_password(user["_id"], new_password)

    # ------------------------------------------------------------
    # Profile
    # ------------------------------------------------------------

    def replace_profile(self, user: dict, profile: dict) -> dict:
        """Overwrite the nested profile, keeping the current picture if none given."""
        current = user.get("profile") or {}
        if not profile.get("profile_picture") and current.get("profile_picture"):
            profile["profile_picture"] = current["profile_picture"]
        self.collection.update_one(
            {"_id": user["_id"]},
            {"$set": {"profile": profile, "updated_at": datetime.utcnow()}},
        )
        return profile

    def update_profile(self, user: dict, changes: dict) -> dict:
        """
        Patch root fields (names, phone) and whitelisted profile fields.

        A key present with None clears that profile field; absent keys are kept.
        Email is not changeable here.
        """
        updates = {}
        for field in ROOT_PROFILE_FIELDS:
            if changes.get(field):
                updates[field] = changes[field]
        for field in PROFILE_FIELDS:
            if field in changes:
                updates[f"profile.{field}"] = changes[field]

        updates["updated_at"] = datetime.utcnow()
        return self.collection.find_one_and_update(
            {"_id": user["_id"]}, {"$set": updates}, return_document=ReturnDocument.AFTER
        )

    def delete(self, user_id) -> None:
        oid = to_object_id(user_id)
        result = self.collection.delete_one({"_id": oid}) if oid else None
        if result is None or result.deleted_count == 0:
            raise NotFound("User not found")
        logger.info("Deleted user %s", user_id)

    # ------------------------------------------------------------
    # Admin moderation
    # ------------------------------------------------------------

    def list_users(self, search: Optional[str] = None, role: Optional[str] = None,
                   is_active: Optional[bool] = None) -> List[dict]:
        query = {}
        if search:
            pattern = {"$regex": re.escape(search), "$options": "i"}
            query["$or"] = [
                {"first_name": pattern},
                {"last_name": pattern},
                {"email": pattern},
            ]
        if role:
            query["role"] = role
        if is_active is not None:
            query["is_active"] = is_active
        return list(self.collection.find(query).sort("created_at", DESCENDING))

    def toggle_active(self, user_id) -> dict:
        user = self.get_by_id(user_id)
        return self.collection.find_one_and_update(
            {"_id": user["_id"]},
            {"$set": {"is_active": not user.get("is_active", True), "updated_at": datetime.utcnow()}},
            return_document=ReturnDocument.AFTER,
        )
