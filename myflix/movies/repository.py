from typing import List, Optional

from google.cloud.firestore_v1.base_query import FieldFilter

from ..core.firebase import store_errors
from .models import Director, Genre, Movie

MOVIES_COLLECTION = 'movies'


def _to_movie(snapshot) -> Movie:
    data = snapshot.to_dict() or {}
    return Movie(
        id=snapshot.id,
        title=data.get('title', ''),
        description=data.get('description', ''),
        genre=Genre(**(data.get('genre') or {})),
        director=Director(**(data.get('director') or {})),
        actors=data.get('actors') or [],
        image_path=data.get('image_path'),
        featured=data.get('featured'),
    )


class MovieRepository:
    def __init__(self, db):
        self.db = db

    async def list_all(self) -> List[Movie]:
        with store_errors("list movies"):
            return [_to_movie(snapshot) async for snapshot in self.db.collection(MOVIES_COLLECTION).stream()]

    async def find_one(self, field_path: str, value: str) -> Optional[Movie]:
        """First movie whose ``field_path`` equals ``value``; later matches are ignored"""
        query = self.db.collection(MOVIES_COLLECTION).where(filter=FieldFilter(field_path, '==', value)).limit(1)
        with store_errors("query movies"):
            snapshots = [snapshot async for snapshot in query.stream()]
        return _to_movie(snapshots[0]) if snapshots else None
