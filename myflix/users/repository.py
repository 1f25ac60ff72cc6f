from datetime import date
from typing import List, Optional

from firebase_admin import firestore
from google.api_core.exceptions import AlreadyExists
from google.cloud.firestore import async_transactional
from google.cloud.firestore_v1.base_query import FieldFilter

from ..core.exceptions import Conflict
from ..core.firebase import store_errors
from .models import User

USERS_COLLECTION = 'users'
USERNAMES_COLLECTION = 'usernames'


def _to_user(snapshot) -> User:
    data = snapshot.to_dict() or {}
    return User(
        id=snapshot.id,
        username=data.get('username', ''),
        password=data.get('password', ''),
        email=data.get('email', ''),
        birthday=data.get('birthday'),
        favorite_movies=data.get('favorite_movies') or [],
    )


def _account_fields(username: str, password_hash: str, email: str, birthday: Optional[date]) -> dict:
    return {
        'username': username,
        'password': password_hash,
        'email': email,
        'birthday': birthday.isoformat() if birthday else None,
    }


async def _append_favorite(transaction, user_ref, movie_id: str):
    # ArrayUnion drops repeats; favorites keep them
    snapshot = await user_ref.get(transaction=transaction)
    favorites = list((snapshot.to_dict() or {}).get('favorite_movies') or [])
    favorites.append(movie_id)
    transaction.update(user_ref, {
        'favorite_movies': favorites,
        'updated_at': firestore.SERVER_TIMESTAMP
    })


class UserRepository:
    """Users collection plus the ``usernames`` reservation collection.

    A reservation document keyed by username is created in the same batch as
    the user, so the store rejects a second user with the same name even when
    two registrations pass the existence pre-check concurrently.
    """

    def __init__(self, db):
        self.db = db

    def _users(self):
        return self.db.collection(USERS_COLLECTION)

    def _reservation(self, username: str):
        return self.db.collection(USERNAMES_COLLECTION).document(username)

    async def _find_snapshot(self, username: str):
        query = self._users().where(filter=FieldFilter('username', '==', username)).limit(1)
        snapshots = [snapshot async for snapshot in query.stream()]
        return snapshots[0] if snapshots else None

    async def find_by_username(self, username: str) -> Optional[User]:
        with store_errors("look up user"):
            snapshot = await self._find_snapshot(username)
        return _to_user(snapshot) if snapshot is not None else None

    async def list_all(self) -> List[User]:
        with store_errors("list users"):
            return [_to_user(snapshot) async for snapshot in self._users().stream()]

    async def create(self, username: str, password_hash: str, email: str, birthday: Optional[date]) -> User:
        user_ref = self._users().document()
        batch = self.db.batch()
        batch.create(self._reservation(username), {'user_id': user_ref.id})
        batch.create(user_ref, {
            **_account_fields(username, password_hash, email, birthday),
            'favorite_movies': [],
            'created_at': firestore.SERVER_TIMESTAMP,
            'updated_at': firestore.SERVER_TIMESTAMP
        })
        with store_errors("create user"):
            try:
                await batch.commit()
            except AlreadyExists as e:
                raise Conflict(f"{username} already exists") from e
            return _to_user(await user_ref.get())

    async def replace(
        self,
        current_username: str,
        username: str,
        password_hash: str,
        email: str,
        birthday: Optional[date],
    ) -> Optional[User]:
        """Overwrite the account fields; favorites are left as they are"""
        with store_errors("update user"):
            snapshot = await self._find_snapshot(current_username)
            if snapshot is None:
                return None

            batch = self.db.batch()
            if username != current_username:
                batch.create(self._reservation(username), {'user_id': snapshot.id})
                batch.delete(self._reservation(current_username))
            batch.update(snapshot.reference, {
                **_account_fields(username, password_hash, email, birthday),
                'updated_at': firestore.SERVER_TIMESTAMP
            })
            try:
                await batch.commit()
            except AlreadyExists as e:
                raise Conflict(f"{username} already exists") from e

            return _to_user(await snapshot.reference.get())

    async def delete_by_username(self, username: str) -> bool:
        with store_errors("delete user"):
            snapshot = await self._find_snapshot(username)
            if snapshot is None:
                return False

            batch = self.db.batch()
            batch.delete(snapshot.reference)
            batch.delete(self._reservation(username))
            await batch.commit()
            return True

    async def push_favorite(self, username: str, movie_id: str) -> Optional[User]:
        with store_errors("add favorite movie"):
            snapshot = await self._find_snapshot(username)
            if snapshot is None:
                return None

            append = async_transactional(_append_favorite)
            await append(self.db.transaction(), snapshot.reference, movie_id)
            return _to_user(await snapshot.reference.get())

    async def pull_favorite(self, username: str, movie_id: str) -> Optional[User]:
        with store_errors("remove favorite movie"):
            snapshot = await self._find_snapshot(username)
            if snapshot is None:
                return None

            await snapshot.reference.update({
                'favorite_movies': firestore.ArrayRemove([movie_id]),
                'updated_at': firestore.SERVER_TIMESTAMP
            })
            return _to_user(await snapshot.reference.get())
