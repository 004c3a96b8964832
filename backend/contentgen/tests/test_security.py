from datetime import timedelta

import jwt
import pytest

from contentgen.core.config import settings
from contentgen.core.security import create_session_token, decode_session_token
from contentgen.errors import Unauthorized


def test_session_token_round_trips_profile_claims() -> None:
    token = create_session_token(
        "oid-1", name="Alice", email="alice@example.com", login_method="google"
    )
    payload = decode_session_token(token)
    assert payload.sub == "oid-1"
    assert payload.name == "Alice"
    assert payload.login_method == "google"


def test_tampered_token_is_unauthorized() -> None:
    token = jwt.encode({"sub": "oid-1"}, "some-other-secret", algorithm=settings.ALGORITHM)
    with pytest.raises(Unauthorized):
        decode_session_token(token)


def test_expired_token_is_unauthorized() -> None:
    token = create_session_token("oid-1", expires_delta=timedelta(seconds=-5))
    with pytest.raises(Unauthorized):
        decode_session_token(token)


def test_token_without_subject_is_unauthorized() -> None:
    token = jwt.encode({"name": "nobody"}, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    with pytest.raises(Unauthorized):
        decode_session_token(token)
