"""
Blog Routes

POST /blogs - Create blog post (admin only, slug derived from title)
GET /blogs - List published posts; optional category and search filters
GET /blogs/{slug} - Read a published post and count the view
PATCH /blogs/{blog_id} - Update post (admin only)
DELETE /blogs/{blog_id} - Delete post (admin only)
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from collexa.api.deps import get_blog_service
from collexa.core.auth import Principal, require_admin
from collexa.schemas.schemas import BlogCategory, BlogCreate, BlogUpdate, MessageResponse
from collexa.services.content_service import BlogService
from collexa.services.mongo_service import serialize_doc, serialize_docs

router = APIRouter(prefix="/blogs", tags=["Blogs"])


@router.post("", status_code=201)
async def create_blog(
    data: BlogCreate,
    principal: Principal = Depends(require_admin),
    blogs: BlogService = Depends(get_blog_service),
):
    blog = blogs.create_blog(data.model_dump())
    return {"success": True, "message": "Blog created successfully", "blog": serialize_doc(blog)}


@router.get("")
async def list_blogs(
    category: Optional[BlogCategory] = Query(None),
    search: Optional[str] = Query(None),
    blogs: BlogService = Depends(get_blog_service),
):
    items = blogs.list_published(category=category.value if category else None, search=search)
    return {"success": True, "count": len(items), "blogs": serialize_docs(items)}


@router.get("/{slug}")
async def read_blog(slug: str, blogs: BlogService = Depends(get_blog_service)):
    return {"success": True, "blog": serialize_doc(blogs.read_by_slug(slug))}


@router.patch("/{blog_id}")
async def update_blog(
    blog_id: str,
    changes: BlogUpdate,
    principal: Principal = Depends(require_admin),
    blogs: BlogService = Depends(get_blog_service),
):
    blog = blogs.update_blog(blog_id, changes.model_dump(exclude_unset=True))
    return {"success": True, "message": "Blog updated successfully", "blog": serialize_doc(blog)}


@router.delete("/{blog_id}", response_model=MessageResponse)
async def delete_blog(
    blog_id: str,
    principal: Principal = Depends(require_admin),
    blogs: BlogService = Depends(get_blog_service),
):
    blogs.delete(blog_id)
    return MessageResponse(message="Blog deleted successfully")
