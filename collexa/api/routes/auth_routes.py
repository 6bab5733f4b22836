"""
Authentication Routes

POST /auth/register - Register student/employer account
POST /auth/join-as-company - Register company owner account
POST /auth/login - Login, sets HTTP-only cookie and returns bearer token
POST /auth/admin/login - Admin login against configured credentials
POST /auth/forgetPassword - Email a one-time reset code (5/hour per IP)
POST /auth/resetPassword - Reset password with the emailed code
POST /auth/changePassword - Change password (logged in)
"""

import logging
import secrets
from datetime import timedelta
from urllib.parse import quote

from fastapi import APIRouter, Depends, Request, Response
from starlette.concurrency import run_in_threadpool

from collexa.api.deps import get_user_service
from collexa.core.auth import TOKEN_COOKIE, Principal, get_token_service, require_user
from collexa.core.config import Settings, get_settings
from collexa.core.errors import ServerError, Unauthenticated
from collexa.core.rate_limit import limiter
from collexa.core.security import ADMIN_ROLE, TokenService
from collexa.schemas.schemas import (
    AdminLoginRequest, ChangePasswordRequest, CompanyRegisterRequest, ForgetPasswordRequest,
    LoginRequest, LoginResponse, MessageResponse, RegisterRequest, ResetPasswordRequest,
    UserSummary,
)
from collexa.services.user_service import UserService
from collexa.utils.mailer import EmailDeliveryError, send_email

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["Authentication"])

ADMIN_PRINCIPAL_ID = "admin_id_001"


def set_session_cookie(response: Response, token: str, minutes: int, settings: Settings) -> None:
    response.set_cookie(
        TOKEN_COOKIE,
        token,
        max_age=minutes * 60,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )


@router.post("/register", status_code=201)
async def register(request: RegisterRequest, users: UserService = Depends(get_user_service)):
    """
    Register a new student or employer account.

    After registration, login to get a session.
    """
    user = users.register(request)
    return {"success": True, "message": "User registered successfully", "user_id": str(user["_id"])}


@router.post("/join-as-company", status_code=201)
async def join_as_company(request: CompanyRegisterRequest, users: UserService = Depends(get_user_service)):
    """Register a company; the owner becomes a `company` user."""
    user = users.register_company(request)
    return {"success": True, "message": "Company registered successfully", "user_id": str(user["_id"])}


@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    response: Response,
    users: UserService = Depends(get_user_service),
    tokens: TokenService = Depends(get_token_service),
    settings: Settings = Depends(get_settings),
):
    """
    Login and receive a session token.

    The token is set as an HTTP-only `token` cookie and also returned for use
    as `Authorization: Bearer <token>`.
    """
    user = users.authenticate(request.email, request.password)
    token = tokens.issue(str(user["_id"]), user["role"])
    set_session_cookie(response, token, settings.jwt_expire_minutes, settings)

    return LoginResponse(
        message="Login successfully",
        token=token,
        user=UserSummary(
            id=str(user["_id"]), role=user["role"],
            first_name=user["first_name"], last_name=user["last_name"],
        ),
    )


@router.post("/admin/login", response_model=LoginResponse)
async def admin_login(
    request: AdminLoginRequest,
    response: Response,
    tokens: TokenService = Depends(get_token_service),
    settings: Settings = Depends(get_settings),
):
    """Admin is not a stored user: credentials come from configuration."""
    email_ok = secrets.compare_digest(request.email.encode(), settings.admin_email.encode())
    password_ok = secrets.compare_digest(request.password.encode(), settings.admin_password.encode())
    if not (email_ok and password_ok):
        raise Unauthenticated("Invalid admin credentials")

    minutes = settings.admin_token_expire_minutes
    token = tokens.issue(ADMIN_PRINCIPAL_ID, ADMIN_ROLE, expires_delta=timedelta(minutes=minutes))
    set_session_cookie(response, token, minutes, settings)

    return LoginResponse(
        message="Admin logged in successfully",
        token=token,
        user=UserSummary(id=ADMIN_PRINCIPAL_ID, role=ADMIN_ROLE, first_name="Admin", last_name="User"),
    )


@router.post("/forgetPassword")
@limiter.limit(get_settings().forget_password_rate_limit)
async def forget_password(
    request: Request,
    body: ForgetPasswordRequest,
    users: UserService = Depends(get_user_service),
    settings: Settings = Depends(get_settings),
):
    """Generate a 6-digit reset code and email it to the user."""
    user, otp = users.start_password_reset(body.email)

    reset_url = f"{settings.frontend_url}/reset-password?email={quote(user['email'])}"
    minutes = settings.reset_otp_expire_minutes
    text = (
        f"Your password reset code is {otp}. It expires in {minutes} minutes.\n\n"
        f"Enter it at {reset_url}\n\nIf you did not request this, please ignore this email."
    )
    html = (
        "<h1>Password Reset Request</h1>"
        f"<p>Your password reset code is <strong>{otp}</strong> (valid for {minutes} minutes).</p>"
        f'<p>Enter it at <a href="{reset_url}">{reset_url}</a></p>'
        "<p>If you did not request this, please ignore this email.</p>"
    )

    try:
        await run_in_threadpool(send_email, settings, user["email"], "Password Reset Code", text, html)
    except EmailDeliveryError as e:
        logger.error("Reset email to %s failed: %s", user["email"], e)
        if settings.environment != "development":
            users.clear_password_reset(user["_id"])
            raise ServerError("Email could not be sent")
        # Development: keep the code usable and surface it in the logs
        logger.warning("Password reset code for %s: %s", user["email"], otp)
        return MessageResponse(message="Email failed to send; reset code kept for local testing (see server log).")

    return MessageResponse(message="Reset code sent to your email")


@router.post("/resetPassword", response_model=MessageResponse)
async def reset_password(body: ResetPasswordRequest, users: UserService = Depends(get_user_service)):
    users.reset_password(body.email, body.otp, body.password)
    return MessageResponse(message="Password reset successful")


@router.post("/changePassword", response_model=MessageResponse)
async def change_password(
    body: ChangePasswordRequest,
    principal: Principal = Depends(require_user),
    users: UserService = Depends(get_user_service),
):
    users.change_password(principal.user, body.current_password, body.new_password)
    return MessageResponse(message="Password changed successfully")
