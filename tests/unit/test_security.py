import unittest

from myflix.core.security import hash_password, verify_password


class PasswordHashingTests(unittest.TestCase):
    def test_hash_is_not_plaintext(self):
        hashed = hash_password("pw1", rounds=4)
        self.assertNotEqual(hashed, "pw1")
        self.assertTrue(hashed.startswith("$2"))

    def test_hash_is_salted(self):
        self.assertNotEqual(hash_password("secret", rounds=4), hash_password("secret", rounds=4))

    def test_default_work_factor_is_ten(self):
        self.assertIn("$10$", hash_password("secret"))

    def test_verify_matches_own_hash(self):
        for plaintext in ["pw1", "correct horse battery staple", "ünïcödé", " "]:
            with self.subTest(plaintext=plaintext):
                self.assertTrue(verify_password(plaintext, hash_password(plaintext, rounds=4)))

    def test_verify_rejects_other_hash(self):
        samples = [("pw1", "pw2"), ("secret", "Secret"), ("abc", "abc ")]
        for plaintext, other in samples:
            with self.subTest(plaintext=plaintext, other=other):
                self.assertFalse(verify_password(plaintext, hash_password(other, rounds=4)))

    def test_verify_malformed_hash_is_false(self):
        self.assertFalse(verify_password("pw1", "not-a-bcrypt-hash"))
        self.assertFalse(verify_password("pw1", "pw1"))


if __name__ == '__main__':
    unittest.main()
