import unittest

from search6_cli.search6 import decode_user
from search6_cli.search6.exceptions import DecodeError
from search6_cli.search6.structures import UserRecord


class TestDecodeUser(unittest.TestCase):

    def test_full_payload(self):
        body = (
            b'{"avatar_url": "https://cdn.example/a.png", "level": 12, "level_progress": 0.25,'
            b' "xp": 4810, "id": 140862798832861184, "username": "alice", "discriminator": "0001",'
            b' "avatar": "a_1f2e", "message_count": 97, "rank": 3}'
        )
        user: UserRecord = decode_user(body)
        self.assertEqual(user["username"], "alice")
        self.assertEqual(user["discriminator"], "0001")
        self.assertEqual(user["id"], 140862798832861184)
        self.assertEqual(user["level"], 12)
        self.assertEqual(user["level_progress"], 0.25)
        self.assertEqual(user["xp"], 4810)
        self.assertEqual(user["avatar"], "a_1f2e")
        self.assertEqual(user["avatar_url"], "https://cdn.example/a.png")
        self.assertEqual(user["message_count"], 97)
        self.assertEqual(user["rank"], 3)

    def test_empty_object_gives_zero_values(self):
        user = decode_user(b"{}")
        self.assertEqual(user["username"], "")
        self.assertEqual(user["discriminator"], "")
        self.assertEqual(user["id"], 0)
        self.assertEqual(user["level"], 0)
        self.assertEqual(user["level_progress"], 0.0)

    def test_null_and_unknown_keys_are_ignored(self):
        user = decode_user(b'{"username": null, "level": 3, "guild": {"id": 1}}')
        self.assertEqual(user["username"], "")
        self.assertEqual(user["level"], 3)
        self.assertNotIn("guild", user)

    def test_keys_match_case_insensitively(self):
        user = decode_user(b'{"Username": "bob", "LEVEL": 6}')
        self.assertEqual(user["username"], "bob")
        self.assertEqual(user["level"], 6)

    def test_integer_accepted_for_float_field(self):
        user = decode_user(b'{"level_progress": 1}')
        self.assertIsInstance(user["level_progress"], float)
        self.assertEqual(user["level_progress"], 1.0)

    def test_not_json(self):
        with self.assertRaises(DecodeError) as ctx:
            decode_user(b"not json")
        self.assertEqual(ctx.exception.exit_code, 4)

    def test_empty_body(self):
        with self.assertRaises(DecodeError):
            decode_user(b"")

    def test_invalid_utf8_in_string_is_replaced(self):
        user = decode_user(b'{"username": "al\xffce", "level": 2}')
        self.assertEqual(user["username"], "al\ufffdce")
        self.assertEqual(user["level"], 2)

    def test_byte_order_mark_rejected(self):
        with self.assertRaises(DecodeError):
            decode_user(b"\xef\xbb\xbf" + b'{"level": 1}')

    def test_utf16_body_rejected(self):
        for encoding in ("utf-16", "utf-16-le", "utf-32"):
            with self.subTest(encoding=encoding):
                with self.assertRaises(DecodeError):
                    decode_user('{"id": 3, "level": 9}'.encode(encoding))

    def test_float_overflow_rejected(self):
        for body in (b'{"level_progress": 1e400}', b'{"level_progress": -1e400}',
                     b'{"level_progress": 1' + b"0" * 400 + b"}"):
            with self.subTest(body=body[:30]):
                with self.assertRaises(DecodeError):
                    decode_user(body)

    def test_nan_literal_rejected(self):
        with self.assertRaises(DecodeError):
            decode_user(b'{"level_progress": NaN}')

    def test_top_level_must_be_object(self):
        for body in (b"[]", b"42", b'"alice"', b"null"):
            with self.subTest(body=body):
                with self.assertRaises(DecodeError):
                    decode_user(body)

    def test_type_mismatches(self):
        bodies = [
            b'{"level": "7"}',
            b'{"level": 7.5}',
            b'{"level": 7.0}',
            b'{"level": true}',
            b'{"username": 42}',
            b'{"discriminator": ["0001"]}',
            b'{"level_progress": false}',
            b'{"id": 9223372036854775808}',
        ]
        for body in bodies:
            with self.subTest(body=body):
                with self.assertRaises(DecodeError):
                    decode_user(body)

    def test_mismatch_message_names_field(self):
        with self.assertRaises(DecodeError) as ctx:
            decode_user(b'{"level": "high"}')
        self.assertIn("'level'", str(ctx.exception))
        self.assertIn("string", str(ctx.exception))


if __name__ == '__main__':
    unittest.main()
