"""
Credential hashing and token tests.
"""

import hashlib

from accounts.core.security import (
    build_password_context,
    hash_password,
    needs_rehash,
    new_token,
    verify_password,
)


def test_hash_is_deterministic_sha256_hex():
    digest = hash_password("password1234")
    assert digest == hash_password("password1234")
    assert digest == hashlib.sha256(b"password1234").hexdigest()


def test_different_passwords_have_different_digests():
    assert hash_password("password1234") != hash_password("password1235")


def test_verify_accepts_only_the_original_password():
    digest = hash_password("secret-pw")
    assert verify_password("secret-pw", digest)
    assert not verify_password("secret-pw ", digest)
    assert not verify_password("other", digest)


def test_verify_rejects_missing_or_unknown_digest():
    assert not verify_password("secret-pw", "")
    assert not verify_password("secret-pw", "not-a-digest")


def test_salted_scheme_still_verifies_legacy_digests():
    """Upgrading the scheme list keeps unsalted digests verifiable and flags them for rehash."""
    legacy = hash_password("legacy-pw")
    context = build_password_context(
        ["sha256_crypt", "hex_sha256"], sha256_crypt__default_rounds=1000
    )

    assert verify_password("legacy-pw", legacy, context)
    assert needs_rehash(legacy, context)

    upgraded = hash_password("legacy-pw", context)
    assert upgraded != legacy
    assert upgraded != hash_password("legacy-pw", context)  # salted
    assert verify_password("legacy-pw", upgraded, context)
    assert not needs_rehash(upgraded, context)


def test_default_digest_does_not_need_rehash():
    assert not needs_rehash(hash_password("whatever"))


def test_new_token_is_128_hex_chars_and_random():
    token = new_token()
    assert len(token) == 128
    int(token, 16)
    assert token != new_token()
    assert len(new_token(16)) == 32
