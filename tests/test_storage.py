import hashlib
import io
from datetime import datetime, timezone

import pytest

from voda.clients.storage import (
    ObjectAttrs,
    ObjectStore,
    StorageClient,
    StorageNotFoundError,
    parse_metadata,
    prep_metadata,
    prep_url,
)


class MemoryStore(ObjectStore):
    def __init__(self, buckets):
        self.objects = {bucket: {} for bucket in buckets}
        self.closed = False

    def bucket_name(self, bucket_id):
        if bucket_id not in self.objects:
            raise StorageNotFoundError()
        return bucket_id

    def object_attrs(self, bucket, name):
        try:
            data, metadata = self.objects[bucket][name]
        except KeyError:
            raise StorageNotFoundError() from None
        return ObjectAttrs(
            bucket=bucket,
            name=name,
            size=len(data),
            etag="etag-" + name,
            md5=hashlib.md5(data).digest(),
            updated=datetime(2022, 3, 1, tzinfo=timezone.utc),
            metadata=dict(metadata),
            media_link=f"https://media.example.com/{bucket}/{name}?alt=media",
        )

    def write_object(self, bucket, name, data):
        self.objects[bucket][name] = (data, {})

    def update_metadata(self, bucket, name, metadata):
        data, _ = self.objects[bucket][name]
        self.objects[bucket][name] = (data, dict(metadata))
        return self.object_attrs(bucket, name)

    def delete_object(self, bucket, name):
        del self.objects[bucket][name]

    def read_object(self, bucket, name, offset=0, length=-1):
        data, _ = self.objects[bucket][name]
        return data[offset:] if length < 0 else data[offset : offset + length]

    def close(self):
        self.closed = True


@pytest.fixture
def store():
    return MemoryStore(["bkt"])


@pytest.fixture
def client(store):
    return StorageClient(store)


def test_prep_metadata_keeps_strings():
    assert prep_metadata({"a": "1", "b": "x"}) == {"a": "1", "b": "x"}


def test_prep_metadata_rejects_non_string():
    with pytest.raises(ValueError, match="value of key 'n' in metadata must be of type string"):
        prep_metadata({"n": 3})


def test_parse_metadata_copies():
    source = {"k": "v"}
    parsed = parse_metadata(source)
    parsed["other"] = 1
    assert source == {"k": "v"}
    assert parse_metadata(None) == {}


def test_prep_url_drops_query_keeps_path():
    assert prep_url("https://h.example.com/a/b?x=1&y=2") == "https://h.example.com/a/b"


def test_put_round_trip(client):
    bucket = client.bucket("bkt")
    item = bucket.put("1/photo/abc", io.BytesIO(b"hello world"), 11, {"kind": "photo"})

    assert item.id == "1/photo/abc"
    assert item.size == 11
    assert item.metadata == {"kind": "photo"}
    assert item.hash == hashlib.md5(b"hello world").hexdigest()
    assert item.url == "https://storage.googleapis.com/bkt/1/photo/abc"
    assert item.open().read() == b"hello world"
    assert bucket.item("1/photo/abc").etag == item.etag


def test_put_bad_metadata_writes_nothing(client, store):
    with pytest.raises(ValueError):
        client.bucket("bkt").put("x", io.BytesIO(b"data"), 4, {"n": 1})
    assert store.objects["bkt"] == {}


def test_open_range_is_inclusive(client):
    bucket = client.bucket("bkt")
    item = bucket.put("f", io.BytesIO(b"0123456789"), 10, None)
    assert item.open_range(2, 5).read() == b"2345"
    with pytest.raises(ValueError):
        item.open_range(5, 2)


def test_download_url_strips_query(client):
    item = client.bucket("bkt").put("f", io.BytesIO(b"x"), 1, {})
    assert item.download_url() == "https://media.example.com/bkt/f"


def test_missing_item_and_removal(client):
    bucket = client.bucket("bkt")
    bucket.put("f", io.BytesIO(b"x"), 1, {})
    bucket.remove_item("f")
    with pytest.raises(StorageNotFoundError):
        bucket.item("f")


def test_missing_bucket(client):
    with pytest.raises(StorageNotFoundError):
        client.bucket("nope")


def test_item_by_url_decodes_item_path(client):
    client.bucket("bkt").put("1/images/test.png", io.BytesIO(b"png"), 3, {})
    item = client.item_by_url(
        "google://storage.example.com/download/storage/v1/b/bkt/o/1%2Fimages%2Ftest.png?jk=abc"
    )
    assert item.name == "1/images/test.png"
    assert item.open().read() == b"png"


def test_item_by_url_wrong_scheme(client):
    with pytest.raises(ValueError, match="not valid google storage URL"):
        client.item_by_url("https://storage.example.com/download/storage/v1/b/bkt/o/f")


def test_item_by_url_missing_bucket_or_item(client):
    with pytest.raises(StorageNotFoundError):
        client.item_by_url("google://h/download/storage/v1/b/nope/o/f")
    with pytest.raises(StorageNotFoundError):
        client.item_by_url("google://h/download/storage/v1/b/bkt/o/missing")