"""
Thin boto3 wrapper over the image bucket.

Only the primitives the API and the resize pipeline need are exposed:
list by prefix, get, open as a stream, and put. S3 failures surface as
``UpstreamFailure``; a missing key surfaces as ``NotFound``.
"""
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from ..core.config import Settings
from ..core.exceptions import NotFound, UpstreamFailure

logger = logging.getLogger(__name__)

_MISSING_KEY_CODES = {"NoSuchKey", "404", "NotFound"}


@dataclass
class StoredObject:
    key: str
    body: bytes
    content_type: Optional[str]


@contextmanager
def s3_errors(action: str, key: str = ""):
    try:
        yield
    except ClientError as e:
        code = e.response.get("Error", {}).get("Code", "")
        if code in _MISSING_KEY_CODES:
            raise NotFound("File not found") from e
        logger.exception(f"S3 {action} failed for {key!r} ({code})")
        raise UpstreamFailure(f"Error during S3 {action}") from e
    except BotoCoreError as e:
        logger.exception(f"S3 {action} failed for {key!r}")
        raise UpstreamFailure(f"Error during S3 {action}") from e


class ObjectStorage:
    def __init__(self, client, bucket: str):
        self.client = client
        self.bucket = bucket

    @classmethod
    def from_settings(cls, settings: Settings) -> "ObjectStorage":
        client = boto3.client(
            "s3",
            region_name=settings.AWS_REGION,
            aws_access_key_id=settings.AWS_ACCESS_KEY_ID,
            aws_secret_access_key=settings.AWS_SECRET_ACCESS_KEY,
            endpoint_url=settings.AWS_S3_ENDPOINT_URL,
            config=BotoConfig(
                connect_timeout=5,
                read_timeout=30,
                retries={"max_attempts": 3, "mode": "standard"},
            ),
        )
        return cls(client, settings.BUCKET_NAME)

    def list_objects(self, prefix: str) -> List[Dict[str, Any]]:
        objects = []
        with s3_errors("list", prefix):
            paginator = self.client.get_paginator("list_objects_v2")
            for page in paginator.paginate(Bucket=self.bucket, Prefix=prefix):
                for item in page.get("Contents", []):
                    objects.append({
                        "Key": item["Key"],
                        "Size": item.get("Size"),
                        "LastModified": item.get("LastModified"),
                    })
        return objects

    def get_object(self, key: str) -> StoredObject:
        with s3_errors("get", key):
            response = self.client.get_object(Bucket=self.bucket, Key=key)
            body = response["Body"].read()
        return StoredObject(key=key, body=body, content_type=response.get("ContentType"))

    def open_object(self, key: str) -> Tuple[Any, Optional[str]]:
        """Return the streaming body and content type without reading it"""
        with s3_errors("get", key):
            response = self.client.get_object(Bucket=self.bucket, Key=key)
        return response["Body"], response.get("ContentType")

    def put_object(self, key: str, body: bytes, content_type: Optional[str]) -> None:
        params = {"Bucket": self.bucket, "Key": key, "Body": body}
        if content_type:
            params["ContentType"] = content_type
        with s3_errors("put", key):
            self.client.put_object(**params)
