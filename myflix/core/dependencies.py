from fastapi import Depends, Request

from ..images.storage import ObjectStorage
from ..movies.repository import MovieRepository
from ..movies.service import MovieService
from ..users.repository import UserRepository
from ..users.service import UserService
from .config import Settings
from .firebase import init_firestore


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_db(request: Request, settings: Settings = Depends(get_app_settings)):
    if getattr(request.app.state, "db", None) is None:
        request.app.state.db = init_firestore(settings)
    return request.app.state.db


def get_storage(request: Request, settings: Settings = Depends(get_app_settings)) -> ObjectStorage:
    if getattr(request.app.state, "storage", None) is None:
        request.app.state.storage = ObjectStorage.from_settings(settings)
    return request.app.state.storage


def get_user_repository(db=Depends(get_db)) -> UserRepository:
    return UserRepository(db)


def get_movie_repository(db=Depends(get_db)) -> MovieRepository:
    return MovieRepository(db)


def get_user_service(
    repository: UserRepository = Depends(get_user_repository),
    settings: Settings = Depends(get_app_settings),
) -> UserService:
    return UserService(repository, bcrypt_rounds=settings.BCRYPT_ROUNDS)


def get_movie_service(repository: MovieRepository = Depends(get_movie_repository)) -> MovieService:
    return MovieService(repository)
