import unittest
from unittest.mock import AsyncMock, MagicMock, patch

from google.api_core.exceptions import AlreadyExists, ServiceUnavailable
from google.cloud.firestore_v1.transforms import ArrayRemove, ArrayUnion

from myflix.core.exceptions import Conflict, UpstreamFailure
from myflix.users.repository import UserRepository, _append_favorite


class AsyncStream:
    def __init__(self, items):
        self.items = list(items)

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for item in self.items:
            yield item


def snapshot(doc_id, data):
    snap = MagicMock()
    snap.id = doc_id
    snap.to_dict.return_value = data
    snap.reference.get = AsyncMock(return_value=snap)
    snap.reference.update = AsyncMock()
    return snap


class UserRepositoryTests(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.db = MagicMock()
        self.query = self.db.collection.return_value.where.return_value.limit.return_value
        self.repository = UserRepository(self.db)

    async def test_find_by_username_maps_document(self):
        self.query.stream.return_value = AsyncStream([snapshot("u1", {
            "username": "alice123",
            "password": "$2b$10$hash",
            "email": "a@b.com",
            "birthday": "1990-05-17",
            "favorite_movies": ["m1", "m1"],
        })])
        user = await self.repository.find_by_username("alice123")
        self.assertEqual(user.id, "u1")
        self.assertEqual(user.birthday.isoformat(), "1990-05-17")
        self.assertEqual(user.favorite_movies, ["m1", "m1"])

    async def test_find_by_username_without_match(self):
        self.query.stream.return_value = AsyncStream([])
        self.assertIsNone(await self.repository.find_by_username("nobody12"))

    async def test_store_failure_becomes_upstream_failure(self):
        self.query.stream.side_effect = ServiceUnavailable("down")
        with self.assertRaises(UpstreamFailure):
            await self.repository.find_by_username("alice123")

    async def test_taken_reservation_becomes_conflict(self):
        batch = self.db.batch.return_value
        batch.commit = AsyncMock(side_effect=AlreadyExists("reservation exists"))
        with self.assertRaises(Conflict):
            await self.repository.create("alice123", "$2b$10$hash", "a@b.com", None)
        self.assertEqual(batch.create.call_count, 2)

    async def test_pull_favorite_uses_array_remove(self):
        snap = snapshot("u1", {"username": "alice123", "favorite_movies": []})
        self.query.stream.return_value = AsyncStream([snap])
        await self.repository.pull_favorite("alice123", "m1")

        update = snap.reference.update.call_args.args[0]
        self.assertIsInstance(update["favorite_movies"], ArrayRemove)
        self.assertEqual(update["favorite_movies"].values, ["m1"])

    async def test_append_favorite_keeps_duplicates(self):
        snap = snapshot("u1", {"username": "alice123", "favorite_movies": ["m1"]})
        user_ref = MagicMock()
        user_ref.get = AsyncMock(return_value=snap)
        transaction = MagicMock()

        await _append_favorite(transaction, user_ref, "m1")

        user_ref.get.assert_awaited_once_with(transaction=transaction)
        ref, update = transaction.update.call_args.args
        self.assertIs(ref, user_ref)
        self.assertEqual(update["favorite_movies"], ["m1", "m1"])
        self.assertIsInstance(update["favorite_movies"], list)
        self.assertNotIsInstance(update["favorite_movies"], ArrayUnion)

    async def test_append_favorite_to_empty_document(self):
        user_ref = MagicMock()
        user_ref.get = AsyncMock(return_value=snapshot("u1", {"username": "alice123"}))
        transaction = MagicMock()

        await _append_favorite(transaction, user_ref, "m2")

        update = transaction.update.call_args.args[1]
        self.assertEqual(update["favorite_movies"], ["m2"])

    async def test_push_favorite_runs_append_in_transaction(self):
        snap = snapshot("u1", {"username": "alice123", "favorite_movies": ["m1"]})
        self.query.stream.return_value = AsyncStream([snap])
        transaction = self.db.transaction.return_value
        append = AsyncMock()

        with patch("myflix.users.repository.async_transactional", return_value=append) as wrap:
            user = await self.repository.push_favorite("alice123", "m1")

        wrap.assert_called_once_with(_append_favorite)
        append.assert_awaited_once_with(transaction, snap.reference, "m1")
        snap.reference.update.assert_not_called()
        self.assertEqual(user.id, "u1")

    async def test_push_favorite_without_user(self):
        self.query.stream.return_value = AsyncStream([])
        self.assertIsNone(await self.repository.push_favorite("nobody12", "m1"))
        self.db.transaction.assert_not_called()

    async def test_rename_swaps_reservations(self):
        snap = snapshot("u1", {"username": "alice123"})
        self.query.stream.return_value = AsyncStream([snap])
        reservations = {}
        self.db.collection.return_value.document.side_effect = (
            lambda name: reservations.setdefault(name, MagicMock(name=name))
        )
        batch = self.db.batch.return_value
        batch.commit = AsyncMock()

        await self.repository.replace("alice123", "alice456", "$2b$10$hash", "a@b.com", None)

        batch.create.assert_called_once_with(reservations["alice456"], {"user_id": "u1"})
        batch.delete.assert_called_once_with(reservations["alice123"])
        ref, update = batch.update.call_args.args
        self.assertIs(ref, snap.reference)
        self.assertEqual(update["username"], "alice456")
        batch.commit.assert_awaited_once()

    async def test_replace_same_username_keeps_reservation(self):
        snap = snapshot("u1", {"username": "alice123"})
        self.query.stream.return_value = AsyncStream([snap])
        batch = self.db.batch.return_value
        batch.commit = AsyncMock()

        await self.repository.replace("alice123", "alice123", "$2b$10$hash", "new@b.com", None)

        batch.create.assert_not_called()
        batch.delete.assert_not_called()
        self.assertEqual(batch.update.call_args.args[1]["email"], "new@b.com")

    async def test_rename_to_taken_username_becomes_conflict(self):
        snap = snapshot("u1", {"username": "alice123"})
        self.query.stream.return_value = AsyncStream([snap])
        batch = self.db.batch.return_value
        batch.commit = AsyncMock(side_effect=AlreadyExists("reservation exists"))

        with self.assertRaises(Conflict):
            await self.repository.replace("alice123", "bob45678", "$2b$10$hash", "a@b.com", None)
        snap.reference.get.assert_not_called()

    async def test_delete_removes_user_and_reservation(self):
        snap = snapshot("u1", {"username": "alice123"})
        self.query.stream.return_value = AsyncStream([snap])
        batch = self.db.batch.return_value
        batch.commit = AsyncMock()

        self.assertTrue(await self.repository.delete_by_username("alice123"))
        self.assertEqual(batch.delete.call_count, 2)
        batch.commit.assert_awaited_once()


if __name__ == '__main__':
    unittest.main()
