"""Unit tests for PasswordHasher."""

import unittest

from services.password_hasher import PasswordHasher


class TestPasswordHasher(unittest.TestCase):

    def setUp(self):
        self.hasher = PasswordHasher(rounds=4)

    def test_hash_is_not_plaintext(self):
        hashed = self.hasher.hash('secret1')
        self.assertNotEqual(hashed, 'secret1')
        self.assertTrue(hashed.startswith('$2'))

    def test_hash_is_salted_per_call(self):
        first = self.hasher.hash('secret1')
        second = self.hasher.hash('secret1')

        self.assertNotEqual(first, second)
        self.assertTrue(self.hasher.verify('secret1', first))
        self.assertTrue(self.hasher.verify('secret1', second))

    def test_verify_rejects_other_password(self):
        hashed = self.hasher.hash('secret1')
        self.assertFalse(self.hasher.verify('secret2', hashed))
        self.assertFalse(self.hasher.verify('', hashed))

    def test_verify_handles_unicode(self):
        hashed = self.hasher.hash('zażółć gęślą')
        self.assertTrue(self.hasher.verify('zażółć gęślą', hashed))

    def test_malformed_hash_returns_false(self):
        self.assertFalse(self.hasher.verify('secret1', 'not-a-bcrypt-hash'))
        self.assertFalse(self.hasher.verify('secret1', ''))
        self.assertFalse(self.hasher.verify('secret1', None))

    def test_long_password_round_trips(self):
        password = 'p' * 80
        hashed = self.hasher.hash(password)

        self.assertTrue(self.hasher.verify(password, hashed))

    def test_only_first_72_bytes_count(self):
        hashed = self.hasher.hash('a' * 72 + 'tail-one')

        self.assertTrue(self.hasher.verify('a' * 72 + 'tail-two', hashed))
        self.assertFalse(self.hasher.verify('a' * 71 + 'b', hashed))

    def test_multibyte_password_cut_mid_character(self):
        password = 'ż' * 50  # 100 bytes
        hashed = self.hasher.hash(password)

        self.assertTrue(self.hasher.verify(password, hashed))

    def test_burn_does_not_raise(self):
        self.hasher.burn('anything')


if __name__ == '__main__':
    unittest.main()
