"""Tests for the MinIO storage service."""
import io
from datetime import timedelta
from unittest.mock import MagicMock

import pytest
from minio import Minio
from minio.error import S3Error

from edge_storage.config import MinioConfig
from edge_storage.exceptions import FileNotFoundError, IntegrityError
from edge_storage.infrastructure import MinioStorageService
from edge_storage.instrumentation import Event, Instrumenter
from edge_storage.minio import get_minio_client


def s3_error(code: str) -> S3Error:
    return S3Error(code, code, "/test-bucket/k", "req", "host", MagicMock())


@pytest.fixture
def service(
    mock_minio: MagicMock, minio_config: MinioConfig, instrumenter: Instrumenter
) -> MinioStorageService:
    return MinioStorageService(mock_minio, minio_config, instrumenter=instrumenter)


class TestMinioUpload:
    """Single-part uploads."""

    def test_upload_bytes(self, service: MinioStorageService, mock_minio: MagicMock) -> None:
        service.upload(
            "a/report",
            b"%PDF",
            checksum="sum",
            filename="report.pdf",
            content_type="application/pdf",
            disposition="attachment",
        )

        kwargs = mock_minio.put_object.call_args.kwargs
        assert kwargs["bucket_name"] == "test-bucket"
        assert kwargs["object_name"] == "a/report"
        assert kwargs["data"].read() == b"%PDF"
        assert kwargs["length"] == 4
        assert kwargs["content_type"] == "application/pdf"
        assert kwargs["metadata"] == {
            "Content-Disposition": "attachment; filename=\"report.pdf\"; filename*=UTF-8''report.pdf",
            "checksum": "sum",
        }

    def test_upload_stream_is_read_fully(self, service: MinioStorageService, mock_minio: MagicMock) -> None:
        service.upload("k", io.BytesIO(b"abc"))

        kwargs = mock_minio.put_object.call_args.kwargs
        assert kwargs["length"] == 3
        assert kwargs["metadata"] is None
        assert kwargs["content_type"] == "application/octet-stream"

    def test_upload_failure(self, service: MinioStorageService, mock_minio: MagicMock) -> None:
        mock_minio.put_object.side_effect = s3_error("AccessDenied")

        with pytest.raises(IntegrityError):
            service.upload("k", b"x")


class TestMinioDownload:
    """Downloads."""

    def test_download(self, service: MinioStorageService, mock_minio: MagicMock) -> None:
        response = MagicMock()
        response.data = b"\x00\x01"
        mock_minio.get_object.return_value = response

        assert service.download("k") == b"\x00\x01"
        mock_minio.get_object.assert_called_once_with("test-bucket", "k")
        response.close.assert_called_once()
        response.release_conn.assert_called_once()

    def test_download_missing(self, service: MinioStorageService, mock_minio: MagicMock) -> None:
        mock_minio.get_object.side_effect = s3_error("NoSuchKey")

        with pytest.raises(FileNotFoundError):
            service.download("k")


class TestMinioDelete:
    """Best-effort deletes."""

    def test_delete_swallows_errors(self, service: MinioStorageService, mock_minio: MagicMock) -> None:
        mock_minio.remove_object.side_effect = s3_error("InternalError")
        service.delete("k")
        mock_minio.remove_object.assert_called_once_with("test-bucket", "k")

    def test_delete_prefixed(self, service: MinioStorageService, mock_minio: MagicMock) -> None:
        first, second = MagicMock(object_name="a/1"), MagicMock(object_name="a/2")
        mock_minio.list_objects.return_value = iter([first, second])
        mock_minio.remove_objects.return_value = iter([])

        service.delete_prefixed("a/")

        mock_minio.list_objects.assert_called_once_with("test-bucket", prefix="a/", recursive=True)
        bucket, delete_list = mock_minio.remove_objects.call_args.args
        assert bucket == "test-bucket"
        assert len(delete_list) == 2

    def test_delete_prefixed_reports_partial_failure(
        self, service: MinioStorageService, mock_minio: MagicMock, events: list[Event]
    ) -> None:
        mock_minio.list_objects.return_value = iter([MagicMock(object_name="a/1")])
        mock_minio.remove_objects.return_value = iter([MagicMock()])

        service.delete_prefixed("a/")

        assert events[-1].payload["error"] == "1 objects not deleted"

    def test_delete_prefixed_swallows_errors(self, service: MinioStorageService, mock_minio: MagicMock) -> None:
        mock_minio.list_objects.side_effect = s3_error("NoSuchBucket")
        service.delete_prefixed("a/")


class TestMinioExists:
    """Existence checks."""

    def test_exists(self, service: MinioStorageService, events: list[Event]) -> None:
        assert service.exists("k") is True
        assert events[-1].payload["exist"] is True

    @pytest.mark.parametrize("code", ["NoSuchKey", "NoSuchObject", "NotFound"])
    def test_missing(self, service: MinioStorageService, mock_minio: MagicMock, code: str) -> None:
        mock_minio.stat_object.side_effect = s3_error(code)
        assert service.exists("k") is False

    def test_other_errors_propagate(self, service: MinioStorageService, mock_minio: MagicMock) -> None:
        mock_minio.stat_object.side_effect = s3_error("AccessDenied")
        with pytest.raises(S3Error):
            service.exists("k")


class TestMinioUrls:
    """URL generation."""

    def test_public_url(self, service: MinioStorageService) -> None:
        assert service.public_url("a/b.png") == "http://localhost:9000/test-bucket/a/b.png"

    def test_private_url_is_presigned(self, service: MinioStorageService, mock_minio: MagicMock) -> None:
        mock_minio.presigned_get_object.return_value = "http://signed"

        url = service.private_url(
            "a/b.png",
            expires_in=60,
            filename="b.png",
            disposition="attachment",
            content_type="image/png",
        )

        assert url == "http://signed"
        mock_minio.presigned_get_object.assert_called_once_with(
            "test-bucket",
            "a/b.png",
            expires=timedelta(seconds=60),
            response_headers={
                "response-content-disposition": "attachment; filename=\"b.png\"; filename*=UTF-8''b.png",
                "response-content-type": "image/png",
            },
        )

    def test_url_uses_private_url_when_not_public(
        self, service: MinioStorageService, mock_minio: MagicMock
    ) -> None:
        mock_minio.presigned_get_object.return_value = "http://signed"
        assert service.url("k", expires_in=10) == "http://signed"


class TestEnsureBucket:
    """Bucket bootstrap."""

    def test_creates_missing_bucket(self, service: MinioStorageService, mock_minio: MagicMock) -> None:
        mock_minio.bucket_exists.return_value = False
        service.ensure_bucket_exists()
        mock_minio.make_bucket.assert_called_once_with("test-bucket")

    def test_keeps_existing_bucket(self, service: MinioStorageService, mock_minio: MagicMock) -> None:
        mock_minio.bucket_exists.return_value = True
        service.ensure_bucket_exists()
        mock_minio.make_bucket.assert_not_called()


class TestMinioUrlsOffline:
    """URL generation with a real client performs no request."""

    @pytest.fixture
    def offline_service(self, instrumenter: Instrumenter) -> MinioStorageService:
        config = MinioConfig(endpoint="127.0.0.1:1", user="u", password="p")
        return MinioStorageService(get_minio_client(config), config, instrumenter=instrumenter)

    def test_default_region(self) -> None:
        """Test the region defaults so signing never needs a bucket location lookup."""
        config = MinioConfig(endpoint="localhost:9000", user="u", password="p")
        assert config.region == "us-east-1"

    def test_private_url_does_not_touch_network(
        self, offline_service: MinioStorageService, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        url_open = MagicMock(side_effect=AssertionError("network request"))
        monkeypatch.setattr(Minio, "_url_open", url_open)

        url = offline_service.private_url("a/b.png", expires_in=60)

        assert url.startswith("http://127.0.0.1:1/blobs/a/b.png?")
        assert "X-Amz-Signature=" in url
        assert url_open.call_count == 0

    def test_url_does_not_touch_network(
        self, offline_service: MinioStorageService, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        url_open = MagicMock(side_effect=AssertionError("network request"))
        monkeypatch.setattr(Minio, "_url_open", url_open)

        offline_service.url("a/b.png", expires_in=60, filename="b.png", disposition="attachment")

        assert url_open.call_count == 0
