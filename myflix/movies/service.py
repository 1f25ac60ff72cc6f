from typing import List

from ..core.exceptions import NotFound
from .models import Movie
from .repository import MovieRepository

class MovieService:
    """Read-only movie lookups.

    Title, genre and director lookups are find-one: when several movies
    match, only the first one the store returns is given back.
    """

    def __init__(self, repository: MovieRepository):
        self.repository = repository

    async def list_movies(self) -> List[Movie]:
        return await self.repository.list_all()

    async def _find_one(self, field_path: str, value: str, label: str) -> Movie:
        movie = await self.repository.find_one(field_path, value)
        if movie is None:
            raise NotFound(f"No movie found for {label} '{value}'")
        return movie

    async def find_by_title(self, title: str) -> Movie:
        return await self._find_one('title', title, "title")

    async def find_by_genre(self, genre_name: str) -> Movie:
        return await self._find_one('genre.name', genre_name, "genre")

    async def find_by_director(self, director_name: str) -> Movie:
        return await self._find_one('director.name', director_name, "director")
