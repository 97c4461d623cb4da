import uuid, pytest, jwt
from datetime import datetime, timedelta, timezone
from captionboard.config import settings
from captionboard.security import principal_from_token
from conftest import make_token


def test_valid_token_gives_principal():
    uid = uuid.uuid4()
    token = make_token(uid, "a@example.com")
    p = principal_from_token(token)
    assert p.id == uid
    assert p.email == "a@example.com"
    assert p.access_token == token


def test_expired_token_rejected():
    past = int((datetime.now(timezone.utc) - timedelta(minutes=5)).timestamp())
    with pytest.raises(jwt.ExpiredSignatureError):
        principal_from_token(make_token(uuid.uuid4(), exp=past))


def test_wrong_audience_rejected():
    with pytest.raises(jwt.InvalidAudienceError):
        principal_from_token(make_token(uuid.uuid4(), aud="someone-else"))


def test_wrong_secret_rejected():
    token = jwt.encode(
        {"sub": str(uuid.uuid4()), "aud": settings.auth_jwt_audience,
         "exp": int((datetime.now(timezone.utc) + timedelta(hours=1)).timestamp())},
        "a-different-secret-0123456789abcdef0123", algorithm="HS256",
    )
    with pytest.raises(jwt.InvalidSignatureError):
        principal_from_token(token)


def test_non_uuid_subject_rejected():
    with pytest.raises(ValueError):
        principal_from_token(make_token("service-account"))
