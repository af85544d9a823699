"""
Showcase Backend — Error Kind Tests
===================================

What:  Tests for the exception hierarchy and the reported_as() labelling.
"""

import pytest

from app.exceptions import (
    ErrorKind,
    MalformedSubmissionError,
    MediaUploadError,
    RecordStoreError,
    ShowcaseError,
    reported_as,
)


class TestErrorKinds:

    @pytest.mark.parametrize(
        "exc, kind, status",
        [
            (MediaUploadError(), ErrorKind.UPLOAD_FAILED, 500),
            (RecordStoreError(), ErrorKind.STORE_FAILED, 500),
            (MalformedSubmissionError(), ErrorKind.VALIDATION_FAILED, 400),
            (ShowcaseError(), ErrorKind.INTERNAL_ERROR, 500),
        ],
    )
    def test_kind_and_status(self, exc, kind, status):
        assert exc.kind == kind
        assert exc.status_code == status

    def test_field_recorded_in_context(self):
        exc = MediaUploadError(message="boom", field="artist_image")
        assert exc.context == {"field": "artist_image"}
        assert str(exc) == "boom"


class TestReportedAs:

    def test_labels_showcase_errors(self):
        with pytest.raises(RecordStoreError) as exc_info:
            with reported_as("Error fetching data"):
                raise RecordStoreError(message="down")

        assert exc_info.value.summary == "Error fetching data"
        assert exc_info.value.kind == ErrorKind.STORE_FAILED

    def test_wraps_unexpected_errors(self):
        with pytest.raises(ShowcaseError) as exc_info:
            with reported_as("Error uploading data"):
                raise KeyError("secure_url")

        exc = exc_info.value
        assert exc.kind == ErrorKind.INTERNAL_ERROR
        assert exc.summary == "Error uploading data"
        assert "secure_url" in exc.message
        assert isinstance(exc.__cause__, KeyError)

    def test_passes_through_success(self):
        with reported_as("Error uploading data"):
            value = 42
        assert value == 42
