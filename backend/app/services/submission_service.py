"""
Showcase Backend — Submission Service (Business Logic Orchestrator)
===================================================================

What:  Coordinates the upload → assemble → persist workflow and the listing.
Why:   Keeps the workflow independent of HTTP so it can be tested with fake
       uploaders and stores.
How:   Composes a MediaUploader and a RecordStore received at construction.
Who:   Built per request by app.dependencies; called by the uploads routes.

Orchestration Flow (POST /uploads):
    ┌──────────┐    ┌──────────────┐    ┌──────────────┐    ┌──────────┐
    │ Parsed   │───▶│ Upload each  │───▶│ Assemble     │───▶│ Insert   │
    │ form     │    │ image (CDN)  │    │ flat record  │    │ (Mongo)  │
    └──────────┘    └──────────────┘    └──────────────┘    └──────────┘

    On failure at any step the exception propagates unchanged. Images already
    hosted for this submission are not deleted, and nothing is inserted.

Upload ordering:
    With upload_concurrency == 1 images are uploaded one at a time in the order
    their parts appeared in the request. Higher values let up to N uploads run
    at once; URLs are collected by field name, so completion order does not
    affect the stored record.
"""

import asyncio
import logging
from typing import Any, Dict, List, Mapping, Optional

from app.config import settings
from app.schemas.upload import IMAGE_FIELDS, TEXT_FIELDS, UploadRecord
from app.services.media_base import MediaUploader
from app.services.record_store import RecordStore

logger = logging.getLogger(__name__)


class SubmissionService:
    """
    Business logic for showcase submissions.

    Responsibilities:
        - submit(): host attached images, build the record, persist it
        - list_records(): return every stored record
    """

    def __init__(
        self,
        uploader: MediaUploader,
        store: RecordStore,
        upload_concurrency: Optional[int] = None,
    ):
        self.uploader = uploader
        self.store = store
        if upload_concurrency is None:
            upload_concurrency = settings.upload_concurrency
        self.upload_concurrency = upload_concurrency

    async def submit(
        self,
        fields: Mapping[str, Optional[str]],
        files: Mapping[str, bytes],
    ) -> Dict[str, Any]:
        """
        Complete workflow: upload images → build record → insert.

        Args:
            fields: Text fields from the request. Unknown names are ignored;
                    missing names are stored as null.
            files:  Image field name → file bytes, in request order.

        Returns:
            The stored record including its `_id`.

        Raises:
            MediaUploadError: An image could not be hosted (nothing inserted).
            RecordStoreError: The insert failed.
        """
        logger.info(
            "Processing submission with %d image(s): %s",
            len(files),
            ", ".join(files) or "none",
        )

        image_urls = await self._upload_images(files)
        record = self.build_record(fields, image_urls)
        stored = await self.store.insert(record)

        logger.info("Submission stored as %s", stored.get("_id"))
        return stored

    async def list_records(self) -> List[Dict[str, Any]]:
        return await self.store.list_all()

    @staticmethod
    def build_record(
        fields: Mapping[str, Optional[str]],
        image_urls: Mapping[str, str],
    ) -> Dict[str, Any]:
        """
        Assemble the flat document to persist.

        Text fields are copied verbatim; each image field gets its hosted URL
        or "" when no file was attached.
        """
        values: Dict[str, Any] = {name: fields.get(name) for name in TEXT_FIELDS}
        values.update({name: image_urls.get(name, "") for name in IMAGE_FIELDS})
        return UploadRecord(**values).model_dump()

    async def _upload_images(self, files: Mapping[str, bytes]) -> Dict[str, str]:
        if self.upload_concurrency <= 1:
            urls: Dict[str, str] = {}
            for field_name, content in files.items():
                urls[field_name] = await self.uploader.upload(content, field_name)
            return urls

        semaphore = asyncio.Semaphore(self.upload_concurrency)

        async def upload_one(field_name: str, content: bytes):
            async with semaphore:
                return field_name, await self.uploader.upload(content, field_name)

        results = await asyncio.gather(
            *(upload_one(name, content) for name, content in files.items())
        )
        return dict(results)
