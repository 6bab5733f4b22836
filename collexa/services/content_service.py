"""
Content Services - companies, blogs, campus courses and certificate courses.

Admin-managed documents served publicly; thin rules on top of CollectionService.
"""

import re
from typing import Any, Dict, List, Optional

from pymongo import ASCENDING, ReturnDocument

from collexa.db.mongodb import COLLECTIONS
from collexa.services.mongo_service import CollectionService


def slugify(title: str) -> str:
    """Lower-case, dash-joined slug: 'Interview Tips 101!' -> 'interview-tips-101'."""
    return re.sub(r"[^\w-]+", "", "-".join(title.split(" ")).lower())


class CompanyService(CollectionService):
    collection_name = COLLECTIONS["companies"]
    not_found_message = "Company not found"
    duplicate_message = "Company name already exists"

    def list_all(self) -> List[dict]:
        return self.list(sort=[("name", ASCENDING)])


class BlogService(CollectionService):
    collection_name = COLLECTIONS["blogs"]
    not_found_message = "Blog not found"
    duplicate_message = "A blog with this title/slug already exists"

    def create_blog(self, data: Dict[str, Any]) -> dict:
        return self.create({**data, "slug": slugify(data["title"]), "views": 0})

    def list_published(self, category: Optional[str] = None, search: Optional[str] = None) -> List[dict]:
        query: Dict[str, Any] = {"is_published": True}
        if category:
            query["category"] = category
        if search:
            pattern = {"$regex": re.escape(search), "$options": "i"}
            query["$or"] = [{"title": pattern}, {"content": pattern}]
        return self.list(query)

    def read_by_slug(self, slug: str) -> dict:
        """Fetch a published blog and count the view."""
        blog = self.collection.find_one_and_update(
            {"slug": slug, "is_published": True},
            {"$inc": {"views": 1}},
            return_document=ReturnDocument.AFTER,
        )
        if not blog:
            raise self._not_found()
        return blog

    def update_blog(self, blog_id: Any, changes: Dict[str, Any]) -> dict:
        if changes.get("title"):
            changes["slug"] = slugify(changes["title"])
        return self.update(blog_id, changes)


class CampusCourseService(CollectionService):
    collection_name = COLLECTIONS["campus_courses"]
    not_found_message = "Campus course not found"

    def list_active(self) -> List[dict]:
        return self.list({"is_active": True})


class CertificateCourseService(CollectionService):
    collection_name = COLLECTIONS["certificate_courses"]
    not_found_message = "Course not found"
