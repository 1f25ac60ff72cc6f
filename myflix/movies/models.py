from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

class Genre(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field("", alias="Name")
    description: str = Field("", alias="Description")

class Director(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field("", alias="Name")
    bio: str = Field("", alias="Bio")

class Movie(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(alias="_id")
    title: str = Field(alias="Title")
    description: str = Field(alias="Description")
    genre: Genre = Field(default_factory=Genre, alias="Genre")
    director: Director = Field(default_factory=Director, alias="Director")
    actors: List[str] = Field(default_factory=list, alias="Actors")
    image_path: Optional[str] = Field(None, alias="ImagePath")
    featured: Optional[bool] = Field(None, alias="Featured")
