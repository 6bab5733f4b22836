"""
User Profile Routes (stored accounts only)

GET /userprofile - Get own account and profile
POST /userprofile - Replace the nested profile
PATCH /userprofile - Update names, phone and individual profile fields
DELETE /userprofile - Delete own account
"""

from fastapi import APIRouter, Depends, Response

from collexa.api.deps import get_user_service
from collexa.core.auth import TOKEN_COOKIE, Principal, require_user
from collexa.schemas.schemas import MessageResponse, ProfileData, ProfileUpdate
from collexa.services.mongo_service import serialize_doc
from collexa.services.user_service import UserService, public_user

router = APIRouter(prefix="/userprofile", tags=["User Profile"])


@router.get("")
async def get_profile(principal: Principal = Depends(require_user)):
    return {"success": True, "user": public_user(principal.user)}


@router.post("", status_code=201)
async def replace_profile(
    data: ProfileData,
    principal: Principal = Depends(require_user),
    users: UserService = Depends(get_user_service),
):
    """Overwrite the whole profile; the current picture is kept when none is sent."""
    profile = users.replace_profile(principal.user, data.model_dump(exclude_none=True))
    return {"success": True, "message": "Profile saved successfully", "profile": serialize_doc(profile)}


@router.patch("")
async def update_profile(
    data: ProfileUpdate,
    principal: Principal = Depends(require_user),
    users: UserService = Depends(get_user_service),
):
    """Only fields present in the body change; send null to clear a profile field."""
    user = users.update_profile(principal.user, data.model_dump(exclude_unset=True))
    return {"success": True, "message": "Profile updated successfully", "user": public_user(user)}


@router.delete("", response_model=MessageResponse)
async def delete_account(
    response: Response,
    principal: Principal = Depends(require_user),
    users: UserService = Depends(get_user_service),
):
    users.delete(principal.id)
    response.delete_cookie(TOKEN_COOKIE)
    return MessageResponse(message="Account deleted successfully")
