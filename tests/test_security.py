import time

from cardzen_api.app.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


def test_password_hash_is_salted_and_verifies():
    first = hash_password("pw1", iterations=1_000)
    second = hash_password("pw1", iterations=1_000)

    assert first != second
    assert "pw1" not in first
    assert verify_password("pw1", first)
    assert verify_password("pw1", second)
    assert not verify_password("pw2", first)


def test_password_hash_records_iterations():
    stored = hash_password("secret", iterations=1_234)

    assert stored.split("$")[0] == "1234"
    assert verify_password("secret", stored)


def test_verify_password_rejects_malformed_hash():
    assert verify_password("pw1", "") is False
    assert verify_password("pw1", "not-a-hash") is False
    assert verify_password("pw1", "10$zz$zz") is False


def test_token_roundtrip_keeps_claims():
    token = create_access_token({"id": 7, "username": "alice", "email": "a@x.com"}, "s3cret")
    payload = decode_access_token(token, "s3cret")

    assert payload["id"] == 7
    assert payload["username"] == "alice"
    assert payload["email"] == "a@x.com"
    assert payload["exp"] > time.time()


def test_token_expires_after_one_hour_by_default():
    before = int(time.time())
    payload = decode_access_token(create_access_token({"id": 1}, "k"), "k")

    assert before + 3600 <= payload["exp"] <= int(time.time()) + 3600


def test_expired_token_is_rejected():
    token = create_access_token({"id": 1}, "k", expires_in=-5)

    assert decode_access_token(token, "k") is None


def test_token_signed_with_other_secret_is_rejected():
    token = create_access_token({"id": 1}, "right")

    assert decode_access_token(token, "wrong") is None


def test_tampered_payload_is_rejected():
    token = create_access_token({"id": 1, "username": "alice"}, "k")
    forged = create_access_token({"id": 2, "username": "mallory"}, "other")
    header, _, signature = token.split(".")
    forged_payload = forged.split(".")[1]

    assert decode_access_token(f"{header}.{forged_payload}.{signature}", "k") is None


def test_malformed_tokens_are_rejected():
    assert decode_access_token("", "k") is None
    assert decode_access_token("a.b", "k") is None
    assert decode_access_token("a.b.c", "k") is None
    assert decode_access_token("!!!.***.###", "k") is None
