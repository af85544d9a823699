"""
Showcase Backend — Upload & Listing Route Handlers
==================================================

What:  POST /uploads (store a submission) and GET /data (list all submissions).
Why:   Entry points used by the site's admin form and its public pages.
How:   Parses the request body, delegates to SubmissionService, returns JSON.

Request Flow (POST /uploads):
    1. Client sends multipart/form-data: text parts + up to six image parts
    2. Body is parsed; every file is read fully into memory
    3. SubmissionService uploads the images and inserts the record
    4. 200 with {"message": "Upload successful", "data": {...}}
    5. Any failure → labelled "Error uploading data" and serialised by the
       global ShowcaseError handler (see main.py)

The body is parsed by hand instead of with File()/Form() parameters so that a
malformed body is reported in the same error shape as every other failure.
"""

import logging
from email.message import Message
from typing import Any, Dict, List, Optional, Tuple

from fastapi import APIRouter, Depends, Request
from starlette.datastructures import UploadFile
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.formparsers import MultiPartException

from app.dependencies import get_submission_service
from app.exceptions import MalformedSubmissionError, reported_as
from app.schemas.upload import (
    IMAGE_FIELDS,
    TEXT_FIELDS,
    ErrorResponse,
    StoredUploadRecord,
    UploadResponse,
)
from app.services.submission_service import SubmissionService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Uploads"])

UPLOAD_FAILED_MESSAGE = "Error uploading data"
FETCH_FAILED_MESSAGE = "Error fetching data"


def _closing_delimiter(content_type: str) -> bytes:
    """
    Return the `--boundary--` line that must terminate a multipart body.

    Raises:
        MalformedSubmissionError: The Content-Type carries no boundary.
    """
    header = Message()
    header["content-type"] = content_type
    boundary = header.get_param("boundary")
    if not boundary or not isinstance(boundary, str):
        raise MalformedSubmissionError(message="Missing boundary in multipart body")
    return b"--" + boundary.encode("latin-1") + b"--"


async def read_submission(
    request: Request,
) -> Tuple[Dict[str, Optional[str]], Dict[str, bytes]]:
    """
    Split the request body into text fields and image payloads.

    Returns:
        (fields, files) where files maps image field name → bytes, in the
        order the parts appeared in the body.

    Raises:
        MalformedSubmissionError: Unparseable or truncated body, file under an
            unexpected field name, or more than one file for the same field.
    """
    content_type = request.headers.get("content-type", "")

    # JSON bodies carry text fields only
    if content_type.startswith("application/json"):
        try:
            payload = await request.json()
        except ValueError as e:
            raise MalformedSubmissionError(message=f"Invalid JSON body: {e}") from e
        if not isinstance(payload, dict):
            raise MalformedSubmissionError(message="JSON body must be an object")
        fields = {
            name: payload.get(name)
            for name in TEXT_FIELDS
            if isinstance(payload.get(name), str)
        }
        return fields, {}

    if content_type.startswith("multipart/form-data"):
        # The form parser stops quietly at the end of the stream, so a body cut
        # off mid-part would otherwise parse as a shorter submission.
        closing = _closing_delimiter(content_type)
        body = await request.body()
        if closing not in body:
            raise MalformedSubmissionError(message="Unexpected end of form")

    try:
        form = await request.form()
    except (MultiPartException, StarletteHTTPException) as e:
        detail = getattr(e, "message", None) or getattr(e, "detail", None) or str(e)
        raise MalformedSubmissionError(message=f"Malformed multipart body: {detail}") from e

    fields: Dict[str, Optional[str]] = {}
    files: Dict[str, bytes] = {}
    uploads: List[Tuple[str, UploadFile]] = []

    for name, value in form.multi_items():
        if isinstance(value, UploadFile):
            if name not in IMAGE_FIELDS:
                raise MalformedSubmissionError(message="Unexpected field", field=name)
            if any(seen == name for seen, _ in uploads):
                raise MalformedSubmissionError(
                    message=f"Only one file is allowed for '{name}'",
                    field=name,
                )
            uploads.append((name, value))
        elif name in TEXT_FIELDS:
            fields[name] = value

    try:
        for name, upload in uploads:
            files[name] = await upload.read()
    finally:
        await form.close()

    return fields, files


@router.post(
    "/uploads",
    response_model=UploadResponse,
    responses={
        200: {"description": "Submission stored", "model": UploadResponse},
        400: {
            "description": (
                "Malformed or truncated body (kind validation_failed). Earlier "
                "versions of this API answered 500 here; upload and database "
                "failures still do."
            ),
            "model": ErrorResponse,
        },
        500: {"description": "Upload or database failure", "model": ErrorResponse},
    },
    summary="Store a showcase submission",
    description=(
        "Accepts multipart/form-data with text fields and up to six optional image "
        "files (artist_image, carousel_image, blog_image, event_image, about_image_1, "
        "about_image_2). Images are hosted on Cloudinary and the combined record is "
        "stored in MongoDB."
    ),
)
async def create_upload(
    request: Request,
    service: SubmissionService = Depends(get_submission_service),
) -> UploadResponse:
    with reported_as(UPLOAD_FAILED_MESSAGE):
        fields, files = await read_submission(request)
        logger.info(
            "Received submission: %d text field(s), images=%s",
            len(fields),
            {name: len(content) for name, content in files.items()},
        )
        stored = await service.submit(fields, files)
        return UploadResponse(message="Upload successful", data=StoredUploadRecord(**stored))


@router.get(
    "/data",
    # Documents are returned exactly as stored: older records may carry extra
    # keys or repeated text fields saved as arrays.
    response_model=None,
    responses={
        200: {"description": "Every stored submission", "model": List[StoredUploadRecord]},
        500: {"description": "Database failure", "model": ErrorResponse},
    },
    summary="List all showcase submissions",
    description="Returns every stored submission, unfiltered and unpaginated.",
)
async def list_uploads(
    service: SubmissionService = Depends(get_submission_service),
) -> List[Dict[str, Any]]:
    with reported_as(FETCH_FAILED_MESSAGE):
        return await service.list_records()
