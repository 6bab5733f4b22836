"""
Admin Routes (admin only)

GET /admin/users - List users; filter by search text, role and active flag
PATCH /admin/users/{user_id}/toggle-active - Activate / deactivate an account
DELETE /admin/users/{user_id} - Delete an account
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from collexa.api.deps import get_user_service
from collexa.core.auth import require_admin
from collexa.schemas.schemas import MessageResponse, UserRole
from collexa.services.user_service import UserService, public_user

router = APIRouter(prefix="/admin", tags=["Admin"], dependencies=[Depends(require_admin)])


@router.get("/users")
async def list_users(
    q: Optional[str] = Query(None, description="Search first name, last name or email"),
    role: Optional[UserRole] = Query(None),
    is_active: Optional[bool] = Query(None),
    users: UserService = Depends(get_user_service),
):
    found = users.list_users(search=q, role=role.value if role else None, is_active=is_active)
    return {"success": True, "count": len(found), "users": [public_user(u) for u in found]}


@router.patch("/users/{user_id}/toggle-active")
async def toggle_active(user_id: str, users: UserService = Depends(get_user_service)):
    """A deactivated user is rejected on their next request, even with a valid token."""
    user = users.toggle_active(user_id)
    state = "activated" if user["is_active"] else "deactivated"
    return {"success": True, "message": f"User {state} successfully", "user": public_user(user)}


@router.delete("/users/{user_id}", response_model=MessageResponse)
async def delete_user(user_id: str, users: UserService = Depends(get_user_service)):
    users.delete(user_id)
    return MessageResponse(message="User deleted successfully")
