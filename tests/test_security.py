"""Unit tests for app.core.security: token issue/verify and opt-in hardening."""

import base64
import json
import unittest
from unittest.mock import patch

from app.core.security import TokenService, format_duration

SECRET = "your-secret-key-for-jwt-signing"


def _segment(obj: object) -> str:
    return base64.b64encode(json.dumps(obj).encode("utf-8")).decode("ascii")


def _decode(segment: str) -> dict:
    return json.loads(base64.b64decode(segment))


class TestIssue(unittest.TestCase):
    def setUp(self) -> None:
        self.tokens = TokenService(SECRET)

    def test_three_segments_with_header_and_claims(self) -> None:
        with patch("app.core.security._now", return_value=1_683_024_910):
            token = self.tokens.issue(7)
        header, payload, signature = token.split(".")
        self.assertEqual(_decode(header), {"alg": "HS256", "typ": "JWT"})
        self.assertEqual(
            _decode(payload), {"sub": 7, "iat": 1_683_024_910, "exp": 1_683_028_510}
        )
        self.assertTrue(signature)

    def test_header_segment_is_compact_standard_base64(self) -> None:
        token = self.tokens.issue(1)
        self.assertEqual(token.split(".")[0], "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9")

    def test_signature_depends_on_secret(self) -> None:
        with patch("app.core.security._now", return_value=1_700_000_000):
            a = TokenService("secret-a").issue(1)
            b = TokenService("secret-b").issue(1)
        self.assertEqual(a.split(".")[:2], b.split(".")[:2])
        self.assertNotEqual(a.split(".")[2], b.split(".")[2])


class TestVerify(unittest.TestCase):
    """verify only parses the payload; signature and exp are not checked."""

    def setUp(self) -> None:
        self.tokens = TokenService(SECRET)

    def test_round_trip_returns_subject(self) -> None:
        for subject in (1, 42, 123456789):
            with self.subTest(subject=subject):
                self.assertEqual(self.tokens.verify(self.tokens.issue(subject)), subject)

    def test_absent_or_non_string_token(self) -> None:
        self.assertIsNone(self.tokens.verify(None))
        self.assertIsNone(self.tokens.verify(""))
        self.assertIsNone(self.tokens.verify(42))

    def test_wrong_segment_count(self) -> None:
        self.assertIsNone(self.tokens.verify("a.b"))
        self.assertIsNone(self.tokens.verify("a.b.c.d"))

    def test_undecodable_payload(self) -> None:
        self.assertIsNone(self.tokens.verify("x.!!!!.y"))
        self.assertIsNone(self.tokens.verify(f"x.{_segment('x')[:-1]}Z.y"))

    def test_payload_not_a_mapping(self) -> None:
        self.assertIsNone(self.tokens.verify(f"x.{_segment([1, 2])}.y"))

    def test_payload_without_sub(self) -> None:
        self.assertIsNone(self.tokens.verify(f"x.{_segment({'iat': 1})}.y"))

    def test_boolean_or_falsy_sub_rejected(self) -> None:
        for sub in (True, False, 0, ""):
            with self.subTest(sub=sub):
                self.assertIsNone(self.tokens.verify(f"x.{_segment({'sub': sub})}.y"))

    def test_forged_signature_is_accepted(self) -> None:
        token = f"x.{_segment({'sub': 5})}.your-signature"
        self.assertEqual(self.tokens.verify(token), 5)

    def test_expired_token_is_accepted(self) -> None:
        with patch("app.core.security._now", return_value=1_000):
            token = self.tokens.issue(3)
        with patch("app.core.security._now", return_value=1_000_000):
            self.assertEqual(self.tokens.verify(token), 3)

    def test_url_safe_unpadded_payload(self) -> None:
        payload = base64.urlsafe_b64encode(b'{"sub":9}').decode("ascii").rstrip("=")
        self.assertEqual(self.tokens.verify(f"x.{payload}.y"), 9)


class TestVerifyHardened(unittest.TestCase):
    """With verify_signature=True, bad signatures and expired tokens are rejected."""

    def setUp(self) -> None:
        self.tokens = TokenService(SECRET, verify_signature=True)

    def test_valid_token_passes(self) -> None:
        self.assertEqual(self.tokens.verify(self.tokens.issue(42)), 42)

    def test_tampered_signature_rejected(self) -> None:
        header, payload, _ = self.tokens.issue(42).split(".")
        self.assertIsNone(self.tokens.verify(f"{header}.{payload}.AAAA"))

    def test_token_from_other_secret_rejected(self) -> None:
        other = TokenService("another-secret").issue(42)
        self.assertIsNone(self.tokens.verify(other))

    def test_expired_token_rejected(self) -> None:
        with patch("app.core.security._now", return_value=1_000):
            token = self.tokens.issue(42)
        with patch("app.core.security._now", return_value=1_000 + 3601):
            self.assertIsNone(self.tokens.verify(token))


class TestExpiresInLabel(unittest.TestCase):
    def test_labels(self) -> None:
        self.assertEqual(TokenService(SECRET).expires_in_label, "1 hour")
        self.assertEqual(format_duration(7200), "2 hours")
        self.assertEqual(format_duration(1800), "30 minutes")
        self.assertEqual(format_duration(86400), "1 day")
        self.assertEqual(format_duration(90), "90 seconds")


if __name__ == "__main__":
    unittest.main()
