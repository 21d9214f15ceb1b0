import json

import pytest

from identity_admin.core import validators
from identity_admin.core.toolkit import InvalidArgumentError


class TestValidateUid:
    def test_returns_uid(self):
        assert validators.validate_uid("alice-123") == "alice-123"

    def test_absent_optional_uid_is_none(self):
        assert validators.validate_uid(None) is None

    def test_accepts_max_length(self):
        assert validators.validate_uid("a" * 128) == "a" * 128

    @pytest.mark.parametrize(
        "uid, message",
        [
            (None, "uid is required"),
            ("", "uid must be a non-empty string"),
            (42, "uid must be a non-empty string"),
            ("a" * 129, "uid must not exceed 128 characters"),
        ],
    )
    def test_required_invalid_cases(self, uid, message):
        with pytest.raises(InvalidArgumentError, match=message):
            validators.validate_uid(uid, required=True)

    def test_invalid_argument_is_value_error(self):
        with pytest.raises(ValueError):
            validators.validate_uid("")


class TestValidateEmail:
    def test_returns_email_unchanged(self):
        assert validators.validate_email("Alice@Example.com") == "Alice@Example.com"

    @pytest.mark.parametrize("email", ["", "no-at-symbol", "user@", "@domain.com", "a@b@c", "us er@example.com", "alice@example.com\n", 7])
    def test_invalid_email_formats(self, email):
        with pytest.raises(InvalidArgumentError):
            validators.validate_email(email)

    def test_required_email_missing(self):
        with pytest.raises(InvalidArgumentError, match="email is required"):
            validators.validate_email(None, required=True)


class TestValidatePhoneNumber:
    def test_accepts_e164(self):
        assert validators.validate_phone_number("+15005550100") == "+15005550100"

    @pytest.mark.parametrize("phone", ["15005550100", "+0123456", "+1 500 555 0100", "+1234567890123456", "+", "", "+15005550100\n"])
    def test_rejects_non_e164(self, phone):
        with pytest.raises(InvalidArgumentError):
            validators.validate_phone_number(phone)

    def test_required_phone_missing(self):
        with pytest.raises(InvalidArgumentError, match="phone number is required"):
            validators.validate_phone_number(None, required=True)


class TestValidateDisplayNameAndPhotoUrl:
    def test_display_name(self):
        assert validators.validate_display_name("Alice Liddell") == "Alice Liddell"
        assert validators.validate_display_name(None) is None

    def test_empty_display_name_rejected(self):
        with pytest.raises(InvalidArgumentError):
            validators.validate_display_name("")

    def test_photo_url(self):
        url = "https://example.com/alice.png"
        assert validators.validate_photo_url(url) == url

    @pytest.mark.parametrize("url", ["", "not a url", "ftp://example.com/a.png", "https://", "/relative/path.png"])
    def test_malformed_photo_url(self, url):
        with pytest.raises(InvalidArgumentError):
            validators.validate_photo_url(url)


class TestValidatePassword:
    def test_accepts_min_length(self):
        assert validators.validate_password("secret") == "secret"

    @pytest.mark.parametrize("password", ["", "short", 123456])
    def test_rejects_short_or_non_string(self, password):
        with pytest.raises(InvalidArgumentError, match="at least 6 characters"):
            validators.validate_password(password)


class TestToBoolean:
    @pytest.mark.parametrize("value, expected", [(True, True), (False, False), (1, True), (0, False), ("yes", True), ("", False)])
    def test_coerces_to_strict_bool(self, value, expected):
        assert validators.to_boolean(value) is expected

    def test_none_stays_none(self):
        assert validators.to_boolean(None) is None


class TestValidateCustomClaims:
    def test_serializes_claims(self):
        assert json.loads(validators.validate_custom_claims({"admin": True})) == {"admin": True}

    def test_none_passes_through(self):
        assert validators.validate_custom_claims(None) is None

    def test_rejects_non_dict(self):
        with pytest.raises(InvalidArgumentError, match="must be a dict"):
            validators.validate_custom_claims(["admin"])

    def test_rejects_reserved_claims(self):
        with pytest.raises(InvalidArgumentError, match="aud, sub are reserved"):
            validators.validate_custom_claims({"sub": "x", "aud": "y", "role": "ok"})

    def test_rejects_oversized_payload(self):
        with pytest.raises(InvalidArgumentError, match="must not exceed 1000"):
            validators.validate_custom_claims({"blob": "x" * 1000})


class TestSessionCookieInputs:
    def test_default_duration_is_valid(self):
        assert validators.validate_session_duration(432000) == 432000

    @pytest.mark.parametrize("duration", [299, 1209601, "3600", True])
    def test_invalid_durations(self, duration):
        with pytest.raises(InvalidArgumentError):
            validators.validate_session_duration(duration)

    def test_id_token_required(self):
        with pytest.raises(InvalidArgumentError):
            validators.validate_id_token("")
