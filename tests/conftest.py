"""
Shared fixtures: an isolated environment and an in-memory S3 client.
"""

import boto3
import pytest
from botocore.config import Config
from botocore.exceptions import ClientError

PUBLISH_VARS = (
    "BUCKET",
    "PREFIX",
    "GITHUB_REPOSITORY",
    "GITHUB_RUN_ID",
    "EXPIRES_IN",
    "SCREENSHOTS_DIR",
    "USE_PUBLIC_URL",
    "AWS_REGION",
    "AWS_DEFAULT_REGION",
    "LOG_LEVEL",
)


class FakeS3Client:
    """Records put_object calls; presigning is delegated to a real offline client."""

    def __init__(self, fail_names=(), region: str = "us-east-1"):
        self.put_calls: list[dict] = []
        self.fail_names = set(fail_names)
        self._signer = boto3.client(
            "s3",
            region_name=region,
            aws_access_key_id="testing",
            aws_secret_access_key="testing",
            config=Config(signature_version="s3v4"),
        )

    def put_object(self, **kwargs):
        self.put_calls.append(kwargs)
        if kwargs["Key"].rsplit("/", 1)[-1] in self.fail_names:
            raise ClientError(
                {"Error": {"Code": "AccessDenied", "Message": "Access Denied"}},
                "PutObject",
            )
        return {"ETag": '"0123456789abcdef"'}

    def generate_presigned_url(self, *args, **kwargs):
        return self._signer.generate_presigned_url(*args, **kwargs)


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    """Run each test in an empty directory with no publisher/capture variables set."""
    for name in PUBLISH_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.delenv("DOCSHOT_OUTPUT_DIR", raising=False)
    monkeypatch.chdir(tmp_path)

    from docshot.config import get_capture_settings
    get_capture_settings.cache_clear()
    yield tmp_path
    get_capture_settings.cache_clear()


@pytest.fixture
def publish_env(tmp_path, monkeypatch):
    """Required publisher variables plus a screenshots directory under tmp_path."""
    shots = tmp_path / "shots"
    shots.mkdir()
    monkeypatch.setenv("BUCKET", "docs-previews")
    monkeypatch.setenv("PREFIX", "pr-screenshots")
    monkeypatch.setenv("GITHUB_REPOSITORY", "acme/terraform-provider-widget")
    monkeypatch.setenv("GITHUB_RUN_ID", "987654")
    monkeypatch.setenv("SCREENSHOTS_DIR", str(shots))
    return shots


@pytest.fixture
def make_s3_client():
    """Factory for in-memory S3 clients: make_s3_client(fail_names={...}, region=...)."""
    return FakeS3Client
