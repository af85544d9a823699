"""
Showcase Backend — Pydantic Request/Response Schemas
====================================================

What:  Pydantic models defining the API contract between the site and backend.
Why:   Automatic serialization and OpenAPI doc generation.
How:   FastAPI uses these models to serialize responses and document endpoints.
Who:   Used by route handlers as response models and by services to build records.

Field groups:
    TEXT_FIELDS  — free text copied verbatim from the submission
    IMAGE_FIELDS — one URL per optional image part ("" when not attached)
"""

from typing import Optional

from pydantic import BaseModel, Field


# ══════════════════════════════════════════════════════════════════════════
# Submission field inventory
# ══════════════════════════════════════════════════════════════════════════

TEXT_FIELDS = (
    "artist_name",
    "artist_lyrics",
    "blog_title",
    "blog_description",
    "event_date",
    "about_description_1",
    "about_description_2",
    "about_description_3",
)

IMAGE_FIELDS = (
    "artist_image",
    "carousel_image",
    "blog_image",
    "event_image",
    "about_image_1",
    "about_image_2",
)


# ══════════════════════════════════════════════════════════════════════════
# Record Models: what gets stored and returned
# ══════════════════════════════════════════════════════════════════════════


class UploadRecord(BaseModel):
    """
    What:  One showcase submission: text content plus hosted image URLs.
    Who:   Built by SubmissionService, inserted by RecordStore.

    Image fields are never null: either the secure URL the media host returned
    or the empty string when the part was not attached.
    """
    artist_name: Optional[str] = None
    artist_lyrics: Optional[str] = None
    blog_title: Optional[str] = None
    blog_description: Optional[str] = None
    event_date: Optional[str] = None
    about_description_1: Optional[str] = None
    about_description_2: Optional[str] = None
    about_description_3: Optional[str] = None

    artist_image: str = Field(default="", description="Hosted image URL or empty string")
    carousel_image: str = Field(default="", description="Hosted image URL or empty string")
    blog_image: str = Field(default="", description="Hosted image URL or empty string")
    event_image: str = Field(default="", description="Hosted image URL or empty string")
    about_image_1: str = Field(default="", description="Hosted image URL or empty string")
    about_image_2: str = Field(default="", description="Hosted image URL or empty string")


class StoredUploadRecord(UploadRecord):
    """
    What:  An UploadRecord as it exists in the database.
    Why:   Adds the store-generated identifier, exposed as `_id` (hex string)
           so existing site code reading `_id` keeps working.
    """
    id: str = Field(alias="_id", description="Identifier assigned by the record store")

    model_config = {"populate_by_name": True}


class UploadResponse(BaseModel):
    """
    What:  Response after a successful submission.
    Who:   Returned by POST /uploads with HTTP 200.
    """
    message: str = Field(default="Upload successful")
    data: StoredUploadRecord


# ══════════════════════════════════════════════════════════════════════════
# Error / Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  The single error format returned by every endpoint.

    Example:
        {
            "message": "Error uploading data",
            "error": "Invalid image file",
            "kind": "upload_failed"
        }
    """
    message: str = Field(description="What the request was doing when it failed")
    error: str = Field(description="Raw failure text")
    kind: str = Field(description="upload_failed, store_failed, validation_failed, internal_error")


class HealthResponse(BaseModel):
    """Health check response showing service and dependency status."""
    status: str = Field(description="Overall service status: healthy, degraded, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    media: str = Field(description="Media host status: available, unavailable")
    uptime_seconds: float = Field(description="Seconds since service started")
