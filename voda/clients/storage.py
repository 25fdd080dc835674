"""Object storage: buckets holding uploaded files."""

from __future__ import annotations

import io
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, BinaryIO
from urllib.parse import unquote, urlsplit, urlunsplit

KIND = "google"
CREDENTIALS_FILE = "credentials.json"
PUBLIC_URL_BASE = "https://storage.googleapis.com"


class StorageNotFoundError(LookupError):
    """Raised when a bucket or an object does not exist."""

    def __init__(self, message: str = "google storage not found") -> None:
        super().__init__(message)


@dataclass(frozen=True)
class ObjectAttrs:
    """Attributes of a stored object as reported by the store."""

    bucket: str
    name: str
    size: int = 0
    etag: str = ""
    md5: bytes = b""
    updated: datetime | None = None
    metadata: Mapping[str, str] = field(default_factory=dict)
    media_link: str = ""


class ObjectStore(ABC):
    """The storage service behind buckets and items."""

    @abstractmethod
    def bucket_name(self, bucket_id: str) -> str:
        """Return the name of bucket ``bucket_id``; raise StorageNotFoundError if missing."""

    @abstractmethod
    def object_attrs(self, bucket: str, name: str) -> ObjectAttrs:
        """Return an object's attributes; raise StorageNotFoundError if missing."""

    @abstractmethod
    def write_object(self, bucket: str, name: str, data: bytes) -> None:
        """Create or replace an object's content."""

    @abstractmethod
    def update_metadata(
        self, bucket: str, name: str, metadata: Mapping[str, str]
    ) -> ObjectAttrs:
        """Set an object's metadata and return its new attributes."""

    @abstractmethod
    def delete_object(self, bucket: str, name: str) -> None:
        """Remove an object."""

    @abstractmethod
    def read_object(self, bucket: str, name: str, offset: int = 0, length: int = -1) -> bytes:
        """Return ``length`` bytes from ``offset``; a negative length reads to the end."""

    def close(self) -> None:
        """Release any resources held by the store."""


def prep_metadata(metadata: Mapping[str, Any]) -> dict[str, str]:
    """Check that every metadata value is a string and return a plain copy."""
    prepped: dict[str, str] = {}
    for key, value in metadata.items():
        if not isinstance(value, str):
            raise ValueError(f"value of key '{key}' in metadata must be of type string")
        prepped[key] = value
    return prepped


def parse_metadata(metadata: Mapping[str, str] | None) -> dict[str, Any]:
    """Copy stored metadata into a general mapping."""
    return dict(metadata or {})


def prep_url(value: str) -> str:
    """Return ``value`` with its query string removed."""
    return urlunsplit(urlsplit(value)._replace(query=""))


@dataclass
class StorageItem:
    """A stored file inside a bucket."""

    name: str
    bucket: StorageBucket = field(repr=False)
    size: int
    etag: str
    hash: str
    last_modified: datetime | None
    url: str
    metadata: dict[str, Any]
    object: ObjectAttrs

    @property
    def id(self) -> str:
        return self.name

    def open(self) -> BinaryIO:
        """Return a stream over the whole content."""
        return io.BytesIO(self.bucket.store.read_object(self.bucket.name, self.name))

    def open_range(self, start: int, end: int) -> BinaryIO:
        """Return a stream over bytes ``start`` to ``end``, both included."""
        if start < 0 or end < start:
            raise ValueError(f"invalid byte range {start}-{end}")
        data = self.bucket.store.read_object(self.bucket.name, self.name, start, end - start + 1)
        return io.BytesIO(data)

    def download_url(self) -> str:
        """Return the media link without its query string."""
        return prep_url(self.object.media_link)


class StorageBucket:
    """A named bucket of objects."""

    def __init__(self, name: str, store: ObjectStore) -> None:
        self.name = name
        self.store = store

    @property
    def id(self) -> str:
        return self.name

    def item(self, item_id: str) -> StorageItem:
        """Return the object ``item_id``; raise StorageNotFoundError if missing."""
        return self._to_item(self.store.object_attrs(self.name, item_id))

    def remove_item(self, item_id: str) -> None:
        self.store.delete_object(self.name, item_id)

    def put(
        self,
        name: str,
        stream: BinaryIO,
        size: int,
        metadata: Mapping[str, Any] | None = None,
    ) -> StorageItem:
        """Upload everything ``stream`` holds as ``name``; ``size`` is the declared length."""
        prepped = prep_metadata(metadata or {})
        data = stream.read()
        if isinstance(data, str):
            raise TypeError("stream must yield bytes")
        self.store.write_object(self.name, name, bytes(data))
        attrs = self.store.update_metadata(self.name, name, prepped)
        return self._to_item(attrs)

    def _to_item(self, attrs: ObjectAttrs) -> StorageItem:
        return StorageItem(
            name=attrs.name,
            bucket=self,
            size=attrs.size,
            etag=attrs.etag,
            hash=attrs.md5.hex(),
            last_modified=attrs.updated,
            url=prep_url(f"{PUBLIC_URL_BASE}/{attrs.bucket}/{attrs.name}"),
            metadata=parse_metadata(attrs.metadata),
            object=attrs,
        )


class StorageClient:
    """Entry point to buckets of one store."""

    def __init__(self, store: ObjectStore) -> None:
        self._store = store

    def close(self) -> None:
        self._store.close()

    def bucket(self, bucket_id: str) -> StorageBucket:
        """Return the bucket named exactly ``bucket_id``."""
        return StorageBucket(self._store.bucket_name(bucket_id), self._store)

    def item_by_url(self, url: str) -> StorageItem:
        """Return the item a storage URL such as ``google://h/download/storage/v1/b/<bucket>/o/<item>`` points to."""
        parts = urlsplit(url)
        if parts.scheme != KIND:
            raise ValueError("not valid google storage URL")
        pieces = unquote(parts.path).split("/", 7)
        if len(pieces) < 8:
            raise ValueError("not valid google storage URL")
        try:
            return self.bucket(pieces[5]).item(pieces[7])
        except Exception as exc:
            raise StorageNotFoundError() from exc