"""
Pydantic Schemas - Request/Response Validation

All API request and response schemas in one file for simplicity.
Every field error is reported at once; the error handler flattens them into
[{"field": ..., "message": ...}].
"""

import re
from datetime import date
from enum import Enum
from typing import Annotated, Any, List, Optional

from bson import ObjectId
from pydantic import AfterValidator, BaseModel, ConfigDict, EmailStr, Field, field_validator

PHONE_RE = re.compile(r"^\+?[0-9][0-9\s\-()]{6,19}$")
SIMPLE_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
URL_PATTERN = r"^https?://(www\.)?[-a-zA-Z0-9@:%._+~#=]{1,256}\.[a-zA-Z0-9()]{1,6}\b([-a-zA-Z0-9()@:%_+.~#?&/=]*)$"


def _check_phone(value: str) -> str:
    if not PHONE_RE.match(value) or sum(ch.isdigit() for ch in value) < 7:
        raise ValueError("Valid phone number is required")
    return value


PhoneNumber = Annotated[str, AfterValidator(_check_phone)]

# bcrypt only reads the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


def _check_password_bytes(value: str) -> str:
    if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
    return value


Password = Annotated[str, Field(min_length=6), AfterValidator(_check_password_bytes)]
PasswordInput = Annotated[str, Field(min_length=1), AfterValidator(_check_password_bytes)]


class Schema(BaseModel):
    """Base schema: trims strings, ignores unknown keys."""
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")


# ============================================================
# ENUMS
# ============================================================

class UserRole(str, Enum):
    student = "student"
    employer = "employer"
    company = "company"


class JobPreference(str, Enum):
    job = "job"
    internship = "internship"


class JobType(str, Enum):
    full_time = "full-time"
    part_time = "part-time"
    remote = "remote"
    hybrid = "hybrid"
    contract = "contract"
    on_site = "on-site"


class InternshipMode(str, Enum):
    office = "office"
    remote = "remote"
    hybrid = "hybrid"


class ApplicationStatus(str, Enum):
    applied = "Applied"
    shortlisted = "Shortlisted"
    rejected = "Rejected"
    hired = "Hired"


class BlogCategory(str, Enum):
    career_advice = "Career Advice"
    interview_tips = "Interview Tips"
    success_stories = "Success Stories"
    product_updates = "Product Updates"
    industry_trends = "Industry Trends"
    internship_guide = "Internship Guide"


class CampusCategory(str, Enum):
    engineering = "Engineering"
    management = "Management"
    technology = "Technology"
    business = "Business"
    design = "Design"
    arts = "Arts"
    science = "Science"


class CourseLevel(str, Enum):
    beginner = "Beginner"
    intermediate = "Intermediate"
    advanced = "Advanced"
    all_levels = "All Levels"


class ContactStatus(str, Enum):
    new = "New"
    contacted = "Contacted"
    resolved = "Resolved"


# ============================================================
# AUTH SCHEMAS
# ============================================================

class RegisterRequest(Schema):
    first_name: str = Field(..., min_length=2, max_length=50)
    last_name: str = Field(..., min_length=2, max_length=50)
    email: EmailStr
    phone_number: PhoneNumber
    password: Password
    role: UserRole = UserRole.student
    job_type: JobPreference = JobPreference.job

    @field_validator("role")
    @classmethod
    def public_roles_only(cls, v: UserRole) -> UserRole:
        if v == UserRole.company:
            raise ValueError("Role must be student or employer")
        return v


class LoginRequest(Schema):
    email: EmailStr
    password: PasswordInput


class AdminLoginRequest(Schema):
    email: str
    password: str


class CompanyRegisterRequest(Schema):
    company_name: str = Field(..., min_length=1)
    company_type: Optional[str] = None
    registration_number: str = Field(..., min_length=1)
    incorporation_date: Optional[date] = None
    industry: Optional[str] = None
    company_email: EmailStr
    company_phone: Optional[str] = None
    registered_address: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    postal_code: Optional[str] = None
    owner_full_name: str = Field(..., min_length=1)
    owner_email: EmailStr
    password: Password
    terms_accepted: bool = Field(False, validate_default=True)

    @field_validator("terms_accepted")
    @classmethod
    def must_accept_terms(cls, v: bool) -> bool:
        if not v:
            raise ValueError("You must accept the terms and conditions")
        return v


class ForgetPasswordRequest(Schema):
    email: EmailStr


class ResetPasswordRequest(Schema):
    email: EmailStr
    otp: str = Field(..., pattern=r"^\d{6}$")
    password: Password


class ChangePasswordRequest(Schema):
    current_password: PasswordInput
    new_password: Password


class UserSummary(BaseModel):
    id: str
    role: str
    first_name: str
    last_name: str


class LoginResponse(BaseModel):
    success: bool = True
    message: str
    token: str
    token_type: str = "bearer"
    user: UserSummary


# ============================================================
# PROFILE SCHEMAS
# ============================================================

class ProfileData(Schema):
    headline: Optional[str] = None
    bio: Optional[str] = None
    skills: Optional[List[str]] = None
    resume_url: Optional[str] = None
    profile_picture: Optional[str] = None
    website: Optional[str] = None
    location: Optional[str] = None


class ProfileUpdate(ProfileData):
    first_name: Optional[str] = Field(None, min_length=2, max_length=50)
    last_name: Optional[str] = Field(None, min_length=2, max_length=50)
    phone_number: Optional[PhoneNumber] = None


PROFILE_FIELDS = list(ProfileData.model_fields)
ROOT_PROFILE_FIELDS = ["first_name", "last_name", "phone_number"]


# ============================================================
# POSTING SCHEMAS
# ============================================================

class JobCreate(Schema):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)
    type: JobType = JobType.full_time
    salary_min: Optional[float] = Field(None, ge=0)
    salary_max: Optional[float] = Field(None, ge=0)
    skills_required: List[str] = []
    openings: int = Field(1, ge=1)
    experience_level: Optional[str] = None
    company: str = Field(..., min_length=1, description="Company id")
    is_active: bool = True


class JobUpdate(Schema):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    location: Optional[str] = Field(None, min_length=1)
    type: Optional[JobType] = None
    salary_min: Optional[float] = Field(None, ge=0)
    salary_max: Optional[float] = Field(None, ge=0)
    skills_required: Optional[List[str]] = None
    openings: Optional[int] = Field(None, ge=1)
    experience_level: Optional[str] = None
    company: Optional[str] = None
    is_active: Optional[bool] = None


class InternshipCreate(Schema):
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)
    stipend_min: Optional[float] = Field(None, ge=0)
    stipend_max: Optional[float] = Field(None, ge=0)
    duration: Optional[str] = None
    start_date: Optional[date] = None
    skills_required: List[str] = []
    openings: int = Field(1, ge=1)
    mode: InternshipMode = InternshipMode.office
    company: str = Field(..., min_length=1, description="Company id")
    is_active: bool = True


class InternshipUpdate(Schema):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    location: Optional[str] = Field(None, min_length=1)
    stipend_min: Optional[float] = Field(None, ge=0)
    stipend_max: Optional[float] = Field(None, ge=0)
    duration: Optional[str] = None
    start_date: Optional[date] = None
    skills_required: Optional[List[str]] = None
    openings: Optional[int] = Field(None, ge=1)
    mode: Optional[InternshipMode] = None
    company: Optional[str] = None
    is_active: Optional[bool] = None


# ============================================================
# APPLICATION SCHEMAS
# ============================================================

_APPLICATION_LABELS = {
    "full_name": "Full Name is required",
    "email": "Email is required",
    "phone_number": "Phone Number is required",
    "why_hire_you": 'Answer to "Why should we hire you?" is required',
}


class ApplicationForm(Schema):
    """Multipart text fields sent alongside the resume."""
    full_name: Optional[str] = Field(None, validate_default=True)
    email: Optional[str] = Field(None, validate_default=True)
    phone_number: Optional[str] = Field(None, validate_default=True)
    why_hire_you: Optional[str] = Field(None, validate_default=True)

    @field_validator("full_name", "email", "phone_number", "why_hire_you")
    @classmethod
    def required(cls, v: Optional[str], info) -> str:
        if not v:
            raise ValueError(_APPLICATION_LABELS[info.field_name])
        if info.field_name == "email" and not SIMPLE_EMAIL_RE.match(v):
            raise ValueError("Invalid email format")
        return v


class ApplicationStatusUpdate(BaseModel):
    # Raw value, untrimmed: the workflow alone decides what is a valid status
    model_config = ConfigDict(extra="ignore")

    status: Any = None


# ============================================================
# COMPANY / CONTENT SCHEMAS
# ============================================================

class CompanyCreate(Schema):
    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    website: Optional[str] = Field(None, pattern=URL_PATTERN)
    location: str = Field(..., min_length=1)
    logo_url: str = "https://via.placeholder.com/150"


class CompanyUpdate(Schema):
    name: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    website: Optional[str] = Field(None, pattern=URL_PATTERN)
    location: Optional[str] = Field(None, min_length=1)
    logo_url: Optional[str] = None


class BlogCreate(Schema):
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1)
    excerpt: str = Field(..., min_length=1, max_length=500)
    author: str = "Collexa Editorial"
    category: BlogCategory = BlogCategory.career_advice
    tags: List[str] = []
    image_url: str = "https://via.placeholder.com/800x400"
    is_published: bool = True


class BlogUpdate(Schema):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    content: Optional[str] = Field(None, min_length=1)
    excerpt: Optional[str] = Field(None, min_length=1, max_length=500)
    author: Optional[str] = None
    category: Optional[BlogCategory] = None
    tags: Optional[List[str]] = None
    image_url: Optional[str] = None
    is_published: Optional[bool] = None


class CampusCourseCreate(Schema):
    university_name: str = Field(..., min_length=1)
    course_name: str = Field(..., min_length=1)
    category: CampusCategory
    degree_type: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    rating: float = Field(0, ge=0, le=5)
    duration: str = Field(..., min_length=1)
    enrolled_count: int = Field(0, ge=0)
    level: str = Field(..., min_length=1)
    is_top: bool = False
    location: str = Field(..., min_length=1)
    is_active: bool = True


class CampusCourseUpdate(Schema):
    university_name: Optional[str] = Field(None, min_length=1)
    course_name: Optional[str] = Field(None, min_length=1)
    category: Optional[CampusCategory] = None
    degree_type: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = Field(None, min_length=1)
    rating: Optional[float] = Field(None, ge=0, le=5)
    duration: Optional[str] = Field(None, min_length=1)
    enrolled_count: Optional[int] = Field(None, ge=0)
    level: Optional[str] = Field(None, min_length=1)
    is_top: Optional[bool] = None
    location: Optional[str] = Field(None, min_length=1)
    is_active: Optional[bool] = None


class CertificateCourseCreate(Schema):
    title: str = Field(..., min_length=1)
    instructor: str = Field(..., min_length=1)
    level: CourseLevel
    badge: str = ""
    rating: float = Field(0, ge=0, le=5)
    students_enrolled: int = Field(0, ge=0)
    duration: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    current_price: float = Field(..., ge=0)
    original_price: float = Field(..., ge=0)
    currency: str = "₹"
    enroll_link: Optional[str] = None
    image: Optional[str] = None


class CertificateCourseUpdate(Schema):
    title: Optional[str] = Field(None, min_length=1)
    instructor: Optional[str] = Field(None, min_length=1)
    level: Optional[CourseLevel] = None
    badge: Optional[str] = None
    rating: Optional[float] = Field(None, ge=0, le=5)
    students_enrolled: Optional[int] = Field(None, ge=0)
    duration: Optional[str] = Field(None, min_length=1)
    category: Optional[str] = Field(None, min_length=1)
    current_price: Optional[float] = Field(None, ge=0)
    original_price: Optional[float] = Field(None, ge=0)
    currency: Optional[str] = None
    enroll_link: Optional[str] = None
    image: Optional[str] = None


# ============================================================
# LEAD / CONTACT SCHEMAS
# ============================================================

class CampusLeadCreate(Schema):
    name: str = Field(..., min_length=2)
    email: EmailStr
    phone: str = Field(..., min_length=1)
    course: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    terms_accepted: bool = Field(False, validate_default=True)

    @field_validator("terms_accepted")
    @classmethod
    def must_accept_terms(cls, v: bool) -> bool:
        if not v:
            raise ValueError("You must accept the terms and conditions")
        return v


class CertificateLeadCreate(Schema):
    full_name: str = Field(..., min_length=2)
    email: EmailStr
    phone_number: str = Field(..., min_length=1)
    city_state: str = Field(..., min_length=1)
    course_id: Optional[str] = None
    course_name: str = Field(..., min_length=1)

    @field_validator("course_id")
    @classmethod
    def valid_course_id(cls, v: Optional[str]) -> Optional[str]:
        if not v:
            return None
        if not ObjectId.is_valid(v):
            raise ValueError("Invalid course id")
        return v


class ContactCreate(Schema):
    full_name: str = Field(..., min_length=2)
    email: EmailStr
    phone_number: PhoneNumber
    subject: Optional[str] = Field(None, max_length=100)
    message: Optional[str] = Field(None, max_length=150)


class ContactStatusUpdate(Schema):
    status: ContactStatus


# ============================================================
# GENERIC SCHEMAS
# ============================================================

class MessageResponse(BaseModel):
    message: str
    success: bool = True


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    errors: Optional[List[dict]] = None
