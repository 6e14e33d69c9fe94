"""
S3 upload + URL generation.

Each screenshot is stored under {prefix}/{repository}/{run_id}/{relative_path}
and exposed either through a fixed public URL (the bucket must allow public
reads, which is left to the caller) or a presigned GetObject URL.
"""

import os
import logging
from dataclasses import dataclass, field

import boto3
from botocore.config import Config

from ..config import PublishSettings

logger = logging.getLogger(__name__)

CONTENT_TYPE = "image/png"


@dataclass
class PublishResult:
    """Outcome of one publisher run, in processing order."""
    urls: list[str] = field(default_factory=list)
    failures: list[tuple[str, str]] = field(default_factory=list)  # (file_path, error)

    @property
    def ok(self) -> bool:
        return not self.failures


def create_s3_client(settings: PublishSettings):
    """S3 client using the standard AWS credential chain, SigV4 for presigning."""
    return boto3.client(
        "s3",
        region_name=settings.aws_region,
        config=Config(signature_version="s3v4"),
    )


def build_object_key(prefix: str, repository: str, run_id: str, relative_path: str) -> str:
    """Join the key segments with '/', normalizing OS path separators."""
    relative_key = relative_path.replace(os.sep, "/")
    return f"{prefix}/{repository}/{run_id}/{relative_key}"


def public_url(bucket: str, region: str, key: str) -> str:
    return f"https://{bucket}.s3.{region}.amazonaws.com/{key}"


def _access_url(client, settings: PublishSettings, key: str) -> str:
    if settings.use_public_url:
        return public_url(settings.bucket, settings.aws_region, key)
    return client.generate_presigned_url(
        "get_object",
        Params={"Bucket": settings.bucket, "Key": key},
        ExpiresIn=settings.expires_in,
    )


def upload_screenshot(client, settings: PublishSettings, file_path: str) -> dict:
    """
    Upload one screenshot and return an accessible URL.

    Args:
        client: boto3 S3 client.
        settings: Validated publisher settings.
        file_path: Path of the PNG, inside settings.screenshots_dir.

    Returns:
        dict: {status, url, key, relative_path} or {status, error, relative_path}.
    """
    relative_path = os.path.relpath(file_path, settings.screenshots_dir)
    try:
        key = build_object_key(
            settings.prefix, settings.github_repository, settings.github_run_id, relative_path,
        )
        with open(file_path, "rb") as f:
            body = f.read()

        client.put_object(
            Bucket=settings.bucket,
            Key=key,
            Body=body,
            ContentType=CONTENT_TYPE,
        )
        url = _access_url(client, settings, key)
    except Exception as e:
        logger.warning("[uploader] Upload failed: %s: %s", file_path, e)
        return {"status": "error", "error": str(e), "relative_path": relative_path}

    logger.debug("[uploader] Uploaded %s -> s3://%s/%s", file_path, settings.bucket, key)
    return {"status": "success", "url": url, "key": key, "relative_path": relative_path}


def publish_screenshots(client, settings: PublishSettings, files: list[str], on_result=None) -> PublishResult:
    """
    Upload files one at a time; a failure does not stop the remaining uploads.

    on_result, when given, is called as on_result(file_path, result_dict)
    after each upload attempt.
    """
    result = PublishResult()
    for file_path in files:
        outcome = upload_screenshot(client, settings, file_path)
        if outcome["status"] == "success":
            result.urls.append(outcome["url"])
        else:
            result.failures.append((file_path, outcome["error"]))
        if on_result is not None:
            on_result(file_path, outcome)

    logger.info(
        "[uploader] Done: %d uploaded, %d failed (%s URLs)",
        len(result.urls), len(result.failures), settings.url_mode,
    )
    return result
