"""In-memory stand-ins for the Firestore repositories and the S3 storage"""
from datetime import date
from typing import Dict, List, Optional

from myflix.core.config import Settings
from myflix.core.exceptions import Conflict, NotFound, UpstreamFailure
from myflix.images.storage import StoredObject
from myflix.movies.models import Movie
from myflix.users.models import User

TEST_SECRET = "unit-test-signing-secret-0123456789abcdef"


def make_settings(**overrides) -> Settings:
    values = {"JWT_SECRET": TEST_SECRET, "BCRYPT_ROUNDS": 4}
    values.update(overrides)
    return Settings(_env_file=None, **values)


class FakeUserRepository:
    def __init__(self):
        self.users: Dict[str, User] = {}
        self._next_id = 1

    def _by_username(self, username: str) -> Optional[User]:
        return next((user for user in self.users.values() if user.username == username), None)

    async def find_by_username(self, username: str) -> Optional[User]:
        return self._by_username(username)

    async def list_all(self) -> List[User]:
        return list(self.users.values())

    async def create(self, username: str, password_hash: str, email: str, birthday: Optional[date]) -> User:
        if self._by_username(username) is not None:
            raise Conflict(f"{username} already exists")
        user = User(
            id=f"user-{self._next_id}",
            username=username,
            password=password_hash,
            email=email,
            birthday=birthday,
        )
        self._next_id += 1
        self.users[user.id] = user
        return user

    async def replace(self, current_username, username, password_hash, email, birthday) -> Optional[User]:
        user = self._by_username(current_username)
        if user is None:
            return None
        updated = user.model_copy(update={
            "username": username,
            "password": password_hash,
            "email": email,
            "birthday": birthday,
        })
        self.users[user.id] = updated
        return updated

    async def delete_by_username(self, username: str) -> bool:
        user = self._by_username(username)
        if user is None:
            return False
        del self.users[user.id]
        return True

    async def push_favorite(self, username: str, movie_id: str) -> Optional[User]:
        user = self._by_username(username)
        if user is None:
            return None
        user.favorite_movies.append(movie_id)
        return user

    async def pull_favorite(self, username: str, movie_id: str) -> Optional[User]:
        user = self._by_username(username)
        if user is None:
            return None
        user.favorite_movies = [favorite for favorite in user.favorite_movies if favorite != movie_id]
        return user


class FakeMovieRepository:
    def __init__(self, movies: List[Movie]):
        self.movies = movies

    async def list_all(self) -> List[Movie]:
        return list(self.movies)

    async def find_one(self, field_path: str, value: str) -> Optional[Movie]:
        for movie in self.movies:
            current = movie.model_dump()
            for part in field_path.split("."):
                current = current.get(part) if isinstance(current, dict) else None
            if current == value:
                return movie
        return None


class FakeBody:
    def __init__(self, data: bytes):
        self.data = data
        self.closed = False

    def iter_chunks(self, chunk_size: int = 1024):
        for start in range(0, len(self.data), chunk_size):
            yield self.data[start:start + chunk_size]

    def close(self):
        self.closed = True


class FakeObjectStorage:
    def __init__(self):
        self.objects: Dict[str, StoredObject] = {}
        self.opened: List[FakeBody] = []
        self.fail_reads = False

    def list_objects(self, prefix: str):
        return [
            {"Key": key, "Size": len(obj.body), "LastModified": None}
            for key, obj in sorted(self.objects.items())
            if key.startswith(prefix)
        ]

    def get_object(self, key: str) -> StoredObject:
        if self.fail_reads:
            raise UpstreamFailure("Error during S3 get")
        if key not in self.objects:
            raise NotFound("File not found")
        return self.objects[key]

    def open_object(self, key: str):
        stored = self.get_object(key)
        body = FakeBody(stored.body)
        self.opened.append(body)
        return body, stored.content_type

    def put_object(self, key: str, body: bytes, content_type: Optional[str]) -> None:
        self.objects[key] = StoredObject(key=key, body=body, content_type=content_type)


def sample_movies() -> List[Movie]:
    return [
        Movie(
            id="m1",
            title="Inception",
            description="Dreams within dreams.",
            genre={"name": "Science Fiction", "description": "Imagined science."},
            director={"name": "Christopher Nolan", "bio": "Filmmaker."},
            actors=["Leonardo DiCaprio"],
            image_path="original-images/inception.jpg",
            featured=True,
        ),
        Movie(
            id="m2",
            title="Interstellar",
            description="Through the wormhole.",
            genre={"name": "Science Fiction", "description": "Imagined science."},
            director={"name": "Christopher Nolan", "bio": "Filmmaker."},
            actors=["Matthew McConaughey"],
        ),
        Movie(
            id="m3",
            title="Parasite",
            description="Two families.",
            genre={"name": "Thriller", "description": "Suspense."},
            director={"name": "Bong Joon-ho", "bio": "Filmmaker."},
            actors=["Song Kang-ho"],
        ),
    ]
