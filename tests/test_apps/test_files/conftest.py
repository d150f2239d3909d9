"""Shared fixtures for files app tests."""

import boto3
import pytest
from django.conf import settings
from django.core.files.base import ContentFile
from moto import mock_aws

from server.apps.files.models import File


@pytest.fixture
def bucket_name():
    """Bucket configured for the default storage.

    Returns:
        Bucket name.
    """
    return settings.STORAGES['default']['OPTIONS']['bucket_name']


@pytest.fixture
def mock_s3(bucket_name):
    """Mock S3 service with the configured bucket.

    Yields:
        boto3 S3 resource with the bucket created.
    """
    with mock_aws():
        conn = boto3.resource('s3', region_name='us-east-1')
        conn.create_bucket(Bucket=bucket_name)
        yield conn


@pytest.fixture
def stored_keys(mock_s3, bucket_name):
    """Callable returning every key currently in the bucket."""
    def factory() -> list[str]:
        return sorted(
            obj.key for obj in mock_s3.Bucket(bucket_name).objects.all()
        )
    return factory


@pytest.fixture
def sample_file_content():
    """Sample file content for testing.

    Returns:
        ContentFile with test data.
    """
    return ContentFile(b'test file content', name='report.pdf')


@pytest.fixture
def make_file(db):
    """Factory creating File records without touching storage."""
    def factory(
        owner,
        name='file.txt',
        category='document',
        size_bytes=100,
    ) -> File:
        extension = name.rpartition('.')[2] if '.' in name else ''
        return File.objects.create(
            user=owner,
            file=f'{owner.id}/blob/{name}',
            name=name,
            extension=extension,
            category=category,
            size_bytes=size_bytes,
        )
    return factory
