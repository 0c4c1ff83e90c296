import jwt
import pytest

from app.core.config import settings
from app.core.errors import Unauthorized
from app.core.security import ALGORITHM, create_access_token, decode_user_id


def test_token_round_trip():
    assert decode_user_id(create_access_token("alice")) == "alice"


def test_expired_token_is_rejected():
    token = create_access_token("alice", expires_minutes=-1)
    with pytest.raises(Unauthorized):
        decode_user_id(token)


def test_token_signed_with_other_key_is_rejected():
    token = jwt.encode({"sub": "alice"}, "not-" + settings.SECRET_KEY, algorithm=ALGORITHM)
    with pytest.raises(Unauthorized):
        decode_user_id(token)


def test_token_without_subject_is_rejected():
    token = jwt.encode({"name": "alice"}, settings.SECRET_KEY, algorithm=ALGORITHM)
    with pytest.raises(Unauthorized):
        decode_user_id(token)


def test_garbage_is_rejected():
    with pytest.raises(Unauthorized):
        decode_user_id("not-a-jwt")
