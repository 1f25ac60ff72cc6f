from fastapi import APIRouter, Depends
from typing import List

from ..auth.dependencies import get_current_user
from ..core.dependencies import get_movie_service
from .models import Movie
from .service import MovieService

router = APIRouter(prefix="/movies", tags=["movies"], dependencies=[Depends(get_current_user)])

@router.get("", response_model=List[Movie])
async def get_movies(movie_service: MovieService = Depends(get_movie_service)):
    """Return every movie"""
    return await movie_service.list_movies()

@router.get("/Genre/{genre_name}", response_model=Movie)
async def get_movie_by_genre(genre_name: str, movie_service: MovieService = Depends(get_movie_service)):
    """Return the first movie of the given genre"""
    return await movie_service.find_by_genre(genre_name)

@router.get("/director/{director_name}", response_model=Movie)
async def get_movie_by_director(director_name: str, movie_service: MovieService = Depends(get_movie_service)):
    """Return the first movie by the given director"""
    return await movie_service.find_by_director(director_name)

@router.get("/{title}", response_model=Movie)
async def get_movie(title: str, movie_service: MovieService = Depends(get_movie_service)):
    return await movie_service.find_by_title(title)
