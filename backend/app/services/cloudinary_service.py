"""
Showcase Backend — Cloudinary Media Uploader
============================================

What:  MediaUploader implementation backed by the Cloudinary Upload API.
Why:   Cloudinary hosts the site's images and serves them from its CDN.
How:   Configures the SDK once with account credentials, streams each payload
       with resource_type="auto" and returns the result's secure_url.
Who:   Created once in the application lifespan; called by SubmissionService.

Blocking SDK:
    cloudinary.uploader.upload() performs a synchronous HTTP request. It runs
    in Starlette's threadpool so a slow upload suspends only the current
    request, not the event loop.

Failure policy:
    No retry. Any SDK error, transport error or response without a
    secure_url is raised as MediaUploadError.
"""

import io
import logging
import time
from typing import Optional

import cloudinary
import cloudinary.api
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError
from starlette.concurrency import run_in_threadpool

from app.config import Settings, settings as default_settings
from app.exceptions import MediaUploadError
from app.services.media_base import MediaUploader

logger = logging.getLogger(__name__)


class CloudinaryUploader(MediaUploader):
    """
    Uploads images to Cloudinary and returns their secure CDN URLs.

    The SDK keeps credentials in module-level configuration, so constructing
    more than one uploader with different accounts in the same process is not
    supported.
    """

    # What: Lets Cloudinary detect image / video / raw from the payload itself
    RESOURCE_TYPE = "auto"

    def __init__(self, config: Optional[Settings] = None):
        self.settings = config or default_settings
        cloudinary.config(
            cloud_name=self.settings.cloudinary_cloud_name,
            api_key=self.settings.cloudinary_api_key,
            api_secret=self.settings.cloudinary_api_secret,
            secure=True,
        )
        logger.info(
            "CloudinaryUploader initialized for cloud=%s",
            self.settings.cloudinary_cloud_name or "<unset>",
        )

    async def upload(self, content: bytes, field_name: str) -> str:
        start_time = time.perf_counter()

        try:
            result = await run_in_threadpool(
                cloudinary.uploader.upload,
                io.BytesIO(content),
                resource_type=self.RESOURCE_TYPE,
            )
        except CloudinaryError as e:
            logger.warning("Cloudinary rejected %s (%d bytes): %s", field_name, len(content), e)
            raise MediaUploadError(
                message=str(e) or "Cloudinary rejected the upload",
                field=field_name,
                context={"size": len(content)},
            ) from e
        except Exception as e:
            logger.error("Upload of %s failed: %s", field_name, e, exc_info=True)
            raise MediaUploadError(
                message=str(e) or type(e).__name__,
                field=field_name,
                context={"error_type": type(e).__name__},
            ) from e

        secure_url = (result or {}).get("secure_url")
        if not secure_url:
            raise MediaUploadError(
                message="Cloudinary response did not include a secure_url",
                field=field_name,
            )

        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.info(
            "Uploaded %s (%d bytes) in %.0fms -> %s",
            field_name,
            len(content),
            duration_ms,
            secure_url,
        )
        return secure_url

    async def health_check(self) -> bool:
        """
        Check that the Admin API answers with the configured credentials.

        Returns False (never raises) so the health endpoint can report
        a degraded state instead of failing.
        """
        if not self.settings.cloudinary_configured:
            return False
        try:
            response = await run_in_threadpool(cloudinary.api.ping)
            return (response or {}).get("status") == "ok"
        except Exception as e:
            logger.warning("Cloudinary health check failed: %s", str(e))
            return False
