"""
Tests for StorageFilesApi.
"""

import io

import httpx
import pytest

from coreend.io.exceptions import NotSignedInError, TransportError, ValidationError

pytestmark = pytest.mark.asyncio

STORAGE_ID = 9


@pytest.fixture
def files(api):
    return api.storage_files(STORAGE_ID)


async def test_get_returns_url(files, server):
    server.add("GET", "storages/9/files/a.png", httpx.Response(200, json={"url": "https://cdn.example/a.png?sig=1"}))

    res = await files.get("a.png")

    assert res.error is None
    assert res.url == "https://cdn.example/a.png?sig=1"


async def test_get_without_url_fails(files, server):
    server.add("GET", "storages/9/files/a.png", httpx.Response(200, json={}))

    res = await files.get("a.png")

    assert isinstance(res.error, ValidationError)
    assert res.url is None


async def test_create_uploads_multipart(files, server, tmp_path):
    server.add("POST", "storages/9/files", httpx.Response(200))
    path = tmp_path / "photo.png"
    path.write_bytes(b"\x89PNG-data")

    res = await files.create(path, captcha_token="captcha123")

    assert res.ok
    request = server.requests[0]
    assert request.headers["Content-Type"].startswith("multipart/form-data")
    content = request.content
    assert b'name="fileName"' in content
    assert b"photo.png" in content
    assert b"\x89PNG-data" in content
    assert request.url.params["hcaptchaResponse"] == "captcha123"


async def test_create_with_rename(files, server):
    server.add("POST", "storages/9/files", httpx.Response(200))
    upload = io.BytesIO(b"hello")
    upload.name = "/tmp/original.txt"

    res = await files.create(upload, "renamed.txt")

    assert res.ok
    content = server.requests[0].content
    assert b"renamed.txt" in content
    assert b"original.txt" not in content


async def test_create_bytes_requires_name(files, server):
    res = await files.create(b"raw")

    assert isinstance(res.error, ValidationError)
    assert server.requests == []


async def test_create_requiring_auth_without_session_sends_nothing(files, server):
    server.add("POST", "storages/9/files", httpx.Response(200))

    res = await files.create(b"raw", "a.png", True, "captcha123")

    assert isinstance(res.error, NotSignedInError)
    assert server.requests == []


async def test_create_with_auth(files, signed_in_server, api):
    signed_in_server.add("POST", "storages/9/files", httpx.Response(200))
    await api.authentication().verify("a@b.com", "000000")

    res = await files.create(b"raw", "a.png", require_auth=True)

    assert res.ok
    upload = signed_in_server.calls("POST", "storages/9/files")[0]
    assert upload.headers["Authorization"] == "Bearer T1"


async def test_remove(files, server):
    server.add("DELETE", "storages/9/files/a.png", httpx.Response(200))

    res = await files.remove("a.png")

    assert res.ok


async def test_remove_failure(files, server):
    server.add("DELETE", "storages/9/files/a.png", httpx.Response(403))

    res = await files.remove("a.png")

    assert isinstance(res.error, TransportError)
    assert res.error.status_code == 403


async def test_get_with_non_string_url_fails(files, server):
    server.add("GET", "storages/9/files/a.png", httpx.Response(200, json={"url": {"href": "x"}}))

    res = await files.get("a.png")

    assert isinstance(res.error, ValidationError)
    assert res.url is None


async def test_remove_with_invalid_file_name_fails(files, server):
    res = await files.remove("a\x00b")

    assert isinstance(res.error, TransportError)
    assert isinstance(res.error.cause, httpx.InvalidURL)
    assert server.requests == []


if __name__ == "__main__":
    pytest.main()
