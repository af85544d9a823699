"""
Showcase Backend — FastAPI Dependency Providers
===============================================

What:  Hands route handlers the shared uploader, store and a SubmissionService.
Why:   The Cloudinary uploader and the MongoDB store are created once in the
       lifespan and kept on `app.state`; handlers receive them by injection
       instead of reading module globals.
How:   Tests replace any provider through `app.dependency_overrides`.

Example:
    app.dependency_overrides[get_media_uploader] = lambda: FakeUploader()
"""

from fastapi import Depends, Request

from app.services.cloudinary_service import CloudinaryUploader
from app.services.media_base import MediaUploader
from app.services.record_store import RecordStore
from app.services.submission_service import SubmissionService


def get_record_store(request: Request) -> RecordStore:
    # An app served without its lifespan has no connected store; an
    # unconnected RecordStore rejects every operation with RecordStoreError.
    store = getattr(request.app.state, "record_store", None)
    if store is None:
        store = RecordStore()
    return store


def get_media_uploader(request: Request) -> MediaUploader:
    uploader = getattr(request.app.state, "media_uploader", None)
    if uploader is None:
        uploader = request.app.state.media_uploader = CloudinaryUploader()
    return uploader


def get_submission_service(
    uploader: MediaUploader = Depends(get_media_uploader),
    store: RecordStore = Depends(get_record_store),
) -> SubmissionService:
    return SubmissionService(uploader=uploader, store=store)
