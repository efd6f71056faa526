"""
Tests for result envelopes, session model and upload helpers.
"""

from datetime import timedelta

import pytest
from pydantic import ValidationError as PydanticValidationError

from coreend.dto.result import AccessTokenResult, IdResult, ItemsResult, ProfileResult, Result
from coreend.dto.session import EPOCH, Profile, Session
from coreend.io.exceptions import NotSignedInError, TransportError
from coreend.io.fs import read_upload


def test_success_envelope():
    res = ItemsResult.success([{"id": 1}])
    assert res.ok
    assert res.error is None
    assert res.unwrap() == [{"id": 1}]


def test_failure_envelope():
    error = TransportError("boom", status_code=500)
    res = IdResult.failure(error)
    assert not res.ok
    assert res.id is None
    with pytest.raises(TransportError):
        res.unwrap()


@pytest.mark.parametrize("cls", [ItemsResult, IdResult, AccessTokenResult, ProfileResult])
def test_envelope_rejects_neither(cls):
    with pytest.raises(PydanticValidationError):
        cls()


def test_envelope_rejects_both():
    with pytest.raises(PydanticValidationError):
        AccessTokenResult(error=NotSignedInError(), access_token="T1")


def test_plain_result():
    assert Result.success().ok
    assert Result.success().unwrap() is None
    assert not Result.failure(NotSignedInError()).ok


def test_profile_result():
    res = ProfileResult.success(Profile(uid="u1", email="a@b.com"))
    assert res.unwrap().email == "a@b.com"


def test_session_lifecycle():
    session = Session()
    assert not session.is_signed_in
    assert session.expires_on == EPOCH
    assert session.is_expiring(timedelta(seconds=30))

    session.sign_in("T1", "R1", timedelta(minutes=15))
    assert session.is_signed_in
    assert not session.is_expiring(timedelta(seconds=30))

    session.reset()
    assert session == Session()


def test_read_upload_from_bytes():
    assert read_upload(b"abc", "a.txt") == ("a.txt", b"abc")
    with pytest.raises(ValueError):
        read_upload(b"abc")


def test_read_upload_from_path(tmp_path):
    path = tmp_path / "doc.pdf"
    path.write_bytes(b"%PDF")
    assert read_upload(str(path)) == ("doc.pdf", b"%PDF")
    assert read_upload(path, "renamed.pdf") == ("renamed.pdf", b"%PDF")
