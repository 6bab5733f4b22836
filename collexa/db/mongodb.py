"""
MongoDB Connection Utility

MongoDB stores every entity of the marketplace:
- users (students, employers, companies; admin is never stored)
- job / internship postings and their applications
- leads, contact messages and public content (blogs, courses, companies)

Uniqueness invariants (one application per posting and user, one account per
email, one lead per email and course) are enforced by unique indexes created in
init_mongo_indexes().
"""
import logging

from pymongo import ASCENDING, MongoClient
from pymongo.database import Database
from pymongo.errors import PyMongoError

from collexa.core.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()

# Global client (connection pooling handled internally by pymongo)
_client: MongoClient = None
_db: Database = None


def get_mongo_client() -> MongoClient:
    """Get or create MongoDB client (singleton pattern)"""
    global _client
    if _client is None:
        _client = MongoClient(settings.mongodb_uri)
    return _client


def get_mongo_db() -> Database:
    """Get the application database. Also used as a FastAPI dependency."""
    global _db
    if _db is None:
        client = get_mongo_client()
        _db = client[settings.mongodb_db]
    return _db


def test_mongo_connection() -> bool:
    """
    Test if MongoDB is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        client = get_mongo_client()
        # ping command checks connection
        client.admin.command('ping')
        return True
    except PyMongoError as e:
        logger.warning("MongoDB connection failed: %s", e)
        return False


# Collection name constants (avoid typos)
COLLECTIONS = {
    "users": "users",
    "companies": "companies",
    "jobs": "jobs",
    "internships": "internships",
    "applications": "applications",
    "internship_applications": "internship_applications",
    "blogs": "blogs",
    "campus_courses": "campus_courses",
    "certificate_courses": "certificate_courses",
    "campus_leads": "lead_campus_courses",
    "certificate_leads": "lead_certificate_courses",
    "contacts": "contact_us",
}


def init_mongo_indexes(db: Database = None):
    """
    Create indexes, including the unique ones backing duplicate prevention.
    Call this once during app startup.
    """
    db = db if db is not None else get_mongo_db()

    db[COLLECTIONS["users"]].create_index("email", unique=True)
    db[COLLECTIONS["users"]].create_index("reset_otp_hash")

    db[COLLECTIONS["companies"]].create_index("name", unique=True)
    db[COLLECTIONS["blogs"]].create_index("slug", unique=True)

    db[COLLECTIONS["jobs"]].create_index([("is_active", ASCENDING), ("created_at", ASCENDING)])
    db[COLLECTIONS["internships"]].create_index([("is_active", ASCENDING), ("created_at", ASCENDING)])

    # At most one application per (posting, user)
    db[COLLECTIONS["applications"]].create_index(
        [("job", ASCENDING), ("user", ASCENDING)], unique=True
    )
    db[COLLECTIONS["internship_applications"]].create_index(
        [("internship", ASCENDING), ("user", ASCENDING)], unique=True
    )

    # Lead duplicate suppression backstop
    db[COLLECTIONS["campus_leads"]].create_index(
        [("email", ASCENDING), ("course", ASCENDING)], unique=True
    )
    db[COLLECTIONS["certificate_leads"]].create_index(
        [("email", ASCENDING), ("course_name", ASCENDING)], unique=True
    )
    db[COLLECTIONS["contacts"]].create_index(
        [("email", ASCENDING), ("subject", ASCENDING)], unique=True
    )

    logger.info("MongoDB indexes created successfully")
