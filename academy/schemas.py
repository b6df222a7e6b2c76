"""
Request Schemas

Pydantic models for every request body the API accepts. Bodies arrive with
camelCase keys; ``model_dump()`` hands the services snake_case field names
that match the storage records.
"""

from enum import Enum
from typing import Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    StrictBool,
    field_validator,
)
from pydantic.alias_generators import to_camel


class ApplicationStatus(str, Enum):
    """Review status of a student or career application."""

    PENDING = 'pending'
    REVIEWED = 'reviewed'
    ACCEPTED = 'accepted'
    REJECTED = 'rejected'

    @classmethod
    def values(cls):
        return [status.value for status in cls]


class RequestModel(BaseModel):
    """Base for client payloads: camelCase aliases, trimmed strings."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra='forbid',
    )


class SubmissionModel(RequestModel):
    # Public forms drop unknown keys, so a client-sent `status` or `isRead` never lands
    model_config = ConfigDict(extra='ignore')


def _reference(value):
    """Opaque string form of a reference to another record."""
    if value is None or value == '':
        return None
    if isinstance(value, bool):
        raise ValueError('must be a record id')
    if isinstance(value, (int, str)):
        return str(value)
    raise ValueError('must be a record id')


# ---------------------------------------------------------------------------
# Accounts
# ---------------------------------------------------------------------------

class CredentialsModel(SubmissionModel):
    # Passwords are hashed exactly as typed; other text fields are trimmed below
    model_config = ConfigDict(str_strip_whitespace=False)


def _strip(value):
    return value.strip() if isinstance(value, str) else value


class RegisterRequest(CredentialsModel):
    username: str = Field(..., min_length=3, max_length=80)
    password: str = Field(..., min_length=6, max_length=128)
    email: Optional[EmailStr] = None
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    profile_image_url: Optional[str] = Field(None, max_length=500)

    @field_validator('username', 'email', 'first_name', 'last_name', 'profile_image_url', mode='before')
    @classmethod
    def strip_text(cls, value):
        return _strip(value)


class LoginRequest(CredentialsModel):
    username: str = Field(..., min_length=1, max_length=80)
    password: str = Field(..., min_length=1, max_length=128)

    @field_validator('username', mode='before')
    @classmethod
    def strip_username(cls, value):
        return _strip(value)


# ---------------------------------------------------------------------------
# Submissions
# ---------------------------------------------------------------------------

class StudentApplicationCreate(SubmissionModel):
    course_id: Optional[str] = None
    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    phone: Optional[str] = Field(None, max_length=30)
    message: Optional[str] = Field(None, max_length=5000)

    @field_validator('course_id', mode='before')
    @classmethod
    def normalize_course_id(cls, value):
        return _reference(value)


class CareerApplicationCreate(SubmissionModel):
    job_id: Optional[str] = None
    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    phone: Optional[str] = Field(None, max_length=30)
    cover_letter: Optional[str] = Field(None, max_length=10000)
    resume_url: Optional[str] = Field(None, max_length=500)

    @field_validator('job_id', mode='before')
    @classmethod
    def normalize_job_id(cls, value):
        return _reference(value)


class ContactMessageCreate(SubmissionModel):
    name: str = Field(..., min_length=1, max_length=200)
    email: EmailStr
    subject: Optional[str] = Field(None, max_length=300)
    message: str = Field(..., min_length=1, max_length=5000)


class FlagUpdate(RequestModel):
    flag: str
    value: StrictBool


# ---------------------------------------------------------------------------
# Listings
# ---------------------------------------------------------------------------

class CategoryCreate(RequestModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    image_url: Optional[str] = Field(None, max_length=500)
    active: bool = True


class CategoryUpdate(RequestModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    image_url: Optional[str] = Field(None, max_length=500)
    active: Optional[bool] = None


class CourseCreate(RequestModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    image: Optional[str] = Field(None, max_length=500)
    duration: Optional[str] = Field(None, max_length=100)
    price: float = Field(..., ge=0)
    featured: bool = False
    category_id: Optional[str] = None
    instructor_name: Optional[str] = Field(None, max_length=200)
    instructor_title: Optional[str] = Field(None, max_length=200)
    instructor_image: Optional[str] = Field(None, max_length=500)
    active: bool = True

    @field_validator('category_id', mode='before')
    @classmethod
    def normalize_category_id(cls, value):
        return _reference(value)


class CourseUpdate(RequestModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, min_length=1)
    image: Optional[str] = Field(None, max_length=500)
    duration: Optional[str] = Field(None, max_length=100)
    price: Optional[float] = Field(None, ge=0)
    featured: Optional[bool] = None
    category_id: Optional[str] = None
    instructor_name: Optional[str] = Field(None, max_length=200)
    instructor_title: Optional[str] = Field(None, max_length=200)
    instructor_image: Optional[str] = Field(None, max_length=500)
    active: Optional[bool] = None

    @field_validator('category_id', mode='before')
    @classmethod
    def normalize_category_id(cls, value):
        return _reference(value)


class TestimonialCreate(RequestModel):
    name: str = Field(..., min_length=1, max_length=200)
    role: Optional[str] = Field(None, max_length=200)
    content: str = Field(..., min_length=1)
    rating: int = Field(..., ge=1, le=5)
    image_url: Optional[str] = Field(None, max_length=500)
    visible: bool = True


class TestimonialUpdate(RequestModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    role: Optional[str] = Field(None, max_length=200)
    content: Optional[str] = Field(None, min_length=1)
    rating: Optional[int] = Field(None, ge=1, le=5)
    image_url: Optional[str] = Field(None, max_length=500)
    visible: Optional[bool] = None


class TeamMemberCreate(RequestModel):
    name: str = Field(..., min_length=1, max_length=200)
    role: str = Field(..., min_length=1, max_length=200)
    bio: Optional[str] = None
    image_url: Optional[str] = Field(None, max_length=500)
    visible: bool = True


class TeamMemberUpdate(RequestModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    role: Optional[str] = Field(None, min_length=1, max_length=200)
    bio: Optional[str] = None
    image_url: Optional[str] = Field(None, max_length=500)
    visible: Optional[bool] = None


class JobCreate(RequestModel):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    requirements: str = Field(..., min_length=1)
    location: Optional[str] = Field(None, max_length=200)
    type: Optional[str] = Field(None, max_length=50)
    active: bool = True


class JobUpdate(RequestModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, min_length=1)
    requirements: Optional[str] = Field(None, min_length=1)
    location: Optional[str] = Field(None, max_length=200)
    type: Optional[str] = Field(None, max_length=50)
    active: Optional[bool] = None
