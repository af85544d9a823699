"""
Showcase Backend — Abstract Media Uploader Interface
====================================================

What:  Abstract base class for "store these bytes, give me a durable URL".
Why:   SubmissionService depends on this contract, not on Cloudinary, so tests
       can swap in an in-memory uploader and the provider can change without
       touching the workflow.
How:   Concrete implementations inherit from MediaUploader and implement
       upload() and health_check().
"""

from abc import ABC, abstractmethod


class MediaUploader(ABC):
    """
    Abstract interface for hosting uploaded images.

    Contract:
        - upload() resolves with an absolute, publicly fetchable URL
        - Implementations never retry
        - All provider-specific errors are wrapped in MediaUploadError
    """

    @abstractmethod
    async def upload(self, content: bytes, field_name: str) -> str:
        """
        Host a binary payload and return its durable URL.

        Args:
            content:    Raw file bytes (held fully in memory).
            field_name: Form field the file arrived under; used for logging
                        and error context only.

        Returns:
            str: Secure absolute URL of the hosted file. Never empty.

        Raises:
            MediaUploadError: The provider rejected the payload or the
                transfer failed.
        """
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """Return True if the provider is reachable with the configured credentials."""
        ...
