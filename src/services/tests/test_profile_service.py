"""Unit tests for profile_service."""

import unittest
from unittest.mock import MagicMock

from adapter.fake.user_repository import FakeUserRepository
from domain.model.errors import NotFoundError, ValidationError
from domain.model.user import User
from services import profile_service


class TestProfileService(unittest.TestCase):

    def setUp(self):
        self.repo = FakeUserRepository()
        self.user = self.repo.insert(
            User.create(email='a@x.com', password_hash='$2b$04$hash', first_name='Anna', phone='123')
        )

    def test_get_self_returns_record(self):
        user = profile_service.get_self(self.repo, self.user.id)
        self.assertEqual(user.email, 'a@x.com')

    def test_get_self_missing_user(self):
        with self.assertRaises(NotFoundError) as context:
            profile_service.get_self(self.repo, 'gone')
        self.assertEqual(context.exception.message, "User not found")

    def test_update_single_field_leaves_others(self):
        updated = profile_service.update_self(self.repo, self.user.id, {'city': 'Poznań'})

        self.assertEqual(updated.city, 'Poznań')
        self.assertEqual(updated.first_name, 'Anna')
        self.assertEqual(updated.phone, '123')
        self.assertEqual(updated.email, 'a@x.com')
        self.assertEqual(updated.password_hash, '$2b$04$hash')
        self.assertEqual(updated.created_at, self.user.created_at)
        self.assertGreater(updated.updated_at, self.user.updated_at)

        stored = self.repo.get_by_id(self.user.id)
        self.assertEqual(stored.city, 'Poznań')

    def test_empty_update_still_touches(self):
        updated = profile_service.update_self(self.repo, self.user.id, {})
        self.assertEqual(updated.first_name, 'Anna')
        self.assertGreater(updated.updated_at, self.user.updated_at)

    def test_null_on_profile_field_is_rejected(self):
        with self.assertRaises(ValidationError) as context:
            profile_service.update_self(self.repo, self.user.id, {'phone': None})

        self.assertEqual(context.exception.errors, {'phone': "Field cannot be null"})
        self.assertEqual(self.repo.get_by_id(self.user.id).phone, '123')

    def test_null_on_defaulted_field_is_rejected(self):
        with self.assertRaises(ValidationError):
            profile_service.update_self(self.repo, self.user.id, {'push_notifications': None})

        self.assertEqual(self.repo.get_by_id(self.user.id).push_notifications, 'true')

    def test_update_settings_fields(self):
        updated = profile_service.update_self(
            self.repo, self.user.id, {'marketing_consent': 'true', 'push_notifications': 'false'},
        )
        self.assertEqual(updated.marketing_consent, 'true')
        self.assertEqual(updated.push_notifications, 'false')

    def test_update_missing_user(self):
        with self.assertRaises(NotFoundError):
            profile_service.update_self(self.repo, 'gone', {'city': 'Poznań'})

    def test_record_deleted_between_read_and_write(self):
        repo = MagicMock()
        repo.get_by_id.return_value = self.user
        repo.update.return_value = None

        with self.assertRaises(NotFoundError):
            profile_service.update_self(repo, self.user.id, {'city': 'Poznań'})

    def test_overlapping_updates_keep_both_fields(self):
        stale = self.repo.get_by_id(self.user.id)
        profile_service.update_self(self.repo, self.user.id, {'phone': '600'})

        # Second request loaded the record before the first one was written
        late_reader = MagicMock(wraps=self.repo)
        late_reader.get_by_id.return_value = stale
        profile_service.update_self(late_reader, self.user.id, {'city': 'Poznań'})

        stored = self.repo.get_by_id(self.user.id)
        self.assertEqual(stored.phone, '600')
        self.assertEqual(stored.city, 'Poznań')

    def test_only_sent_fields_reach_the_store(self):
        repo = MagicMock()
        repo.get_by_id.return_value = self.user

        profile_service.update_self(repo, self.user.id, {'city': 'Poznań'})

        user_id, changes, updated_at = repo.update.call_args[0]
        self.assertEqual(user_id, self.user.id)
        self.assertEqual(changes, {'city': 'Poznań'})
        self.assertGreater(updated_at, self.user.created_at)

    def test_last_write_wins(self):
        profile_service.update_self(self.repo, self.user.id, {'city': 'Poznań'})
        profile_service.update_self(self.repo, self.user.id, {'city': 'Gdańsk'})

        self.assertEqual(self.repo.get_by_id(self.user.id).city, 'Gdańsk')


if __name__ == '__main__':
    unittest.main()
