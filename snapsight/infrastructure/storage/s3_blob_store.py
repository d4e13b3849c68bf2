"""
S3 object storage backend.
Handles blob upload and deletion in a single bucket.

boto3 is synchronous, so every call runs in a worker thread.
"""
import asyncio
import logging
from typing import Optional
from urllib.parse import quote

import boto3
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError

from ...core.config import Settings
from ...domain.exceptions import BlobDeletionError, BlobStorageError

logger = logging.getLogger(__name__)


class S3BlobStore:
    """
    Service for storing photo blobs in an S3 bucket.
    
    Objects are written under their storage key at the bucket root. The
    client is created lazily on first use and reused afterwards.
    """
    
    def __init__(
        self,
        bucket: str,
        region: str,
        access_key_id: str,
        secret_access_key: str,
        public_base_url: str = "",
    ) -> None:
        self.bucket = bucket
        self.region = region
        self._access_key_id = access_key_id
        self._secret_access_key = secret_access_key
        self.public_base_url = public_base_url.rstrip("/")
        self._s3_client = None
    
    @classmethod
    def from_settings(cls, settings: Settings) -> Optional["S3BlobStore"]:
        """Build a store from settings, or None when remote storage is not configured"""
        if not settings.remote_storage_configured:
            return None
        return cls(
            bucket=settings.s3_bucket_name,
            region=settings.aws_region,
            access_key_id=settings.aws_access_key_id,
            secret_access_key=settings.aws_secret_access_key,
            public_base_url=settings.s3_public_base_url,
        )
    
    def _get_s3_client(self):
        """
        Get or create S3 client.
        
        Returns:
            Configured boto3 S3 client
        """
        if self._s3_client is not None:
            return self._s3_client
        
        self._s3_client = boto3.client(
            "s3",
            region_name=self.region,
            aws_access_key_id=self._access_key_id,
            aws_secret_access_key=self._secret_access_key,
            config=Config(signature_version="s3v4"),
        )
        return self._s3_client
    
    def url_for(self, key: str) -> str:
        if self.public_base_url:
            return f"{self.public_base_url}/{quote(key)}"
        return f"https://{self.bucket}.s3.{self.region}.amazonaws.com/{quote(key)}"
    
    async def save(self, key: str, data: bytes, content_type: str) -> str:
        """
        Upload a blob to the bucket.
        
        Returns:
            Public URL of the uploaded object
            
        Raises:
            BlobStorageError: If the upload fails for any reason
        """
        try:
            client = self._get_s3_client()
            await asyncio.to_thread(
                client.put_object,
                Bucket=self.bucket,
                Key=key,
                Body=data,
                ContentType=content_type,
            )
        except (ClientError, BotoCoreError) as e:
            raise BlobStorageError(f"S3 upload of {key} failed: {e}") from e
        
        logger.info(f"Uploaded {key} to bucket {self.bucket}")
        return self.url_for(key)
    
    async def delete(self, key: str) -> None:
        """
        Delete a blob from the bucket.
        
        S3 reports success for deletes of missing keys, so existence is
        checked first: a missing object is a deletion failure.
        
        Raises:
            BlobDeletionError: If the object is missing or cannot be deleted
        """
        try:
            client = self._get_s3_client()
            await asyncio.to_thread(client.head_object, Bucket=self.bucket, Key=key)
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code", "")
            if code in ("404", "NoSuchKey", "NotFound"):
                raise BlobDeletionError(f"Object {key} not found in bucket {self.bucket}") from e
            raise BlobDeletionError(f"S3 lookup of {key} failed: {e}") from e
        except BotoCoreError as e:
            raise BlobDeletionError(f"S3 lookup of {key} failed: {e}") from e
        
        try:
            await asyncio.to_thread(client.delete_object, Bucket=self.bucket, Key=key)
        except (ClientError, BotoCoreError) as e:
            raise BlobDeletionError(f"S3 delete of {key} failed: {e}") from e
        
        logger.info(f"Deleted {key} from bucket {self.bucket}")
