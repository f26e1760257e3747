from fastapi import APIRouter, Depends, status
from pymongo.collection import Collection
from typing import List

from app.database import get_movie_collection
from app.schemas.movie import MovieCreate, MovieUpdate, MovieResponse, MessageResponse
from app.services.movie_service import MovieService

router = APIRouter(prefix="/movies", tags=["Movies"])

# `{title:path}` keeps titles containing an encoded slash (AC%2FDC) routable.
# Path parameters arrive percent-decoded. "/movies/" is the list, never an empty title.


@router.get("", response_model=List[MovieResponse])
@router.get("/", response_model=List[MovieResponse], include_in_schema=False)
def list_movies(collection: Collection = Depends(get_movie_collection)):
    """Get all movies in store order"""
    return MovieService.list_movies(collection)


@router.get("/{title:path}", response_model=MovieResponse)
def get_movie(title: str, collection: Collection = Depends(get_movie_collection)):
    """
    Get one movie by title

    Matching is exact and ignores case: `/movies/the%20matrix` finds
    "The Matrix" but not "The Matrix 2". With duplicate titles the first
    stored movie wins.
    """
    return MovieService.get_movie(collection, title)


@router.post("", response_model=MovieResponse, status_code=status.HTTP_201_CREATED)
@router.post("/", response_model=MovieResponse, status_code=status.HTTP_201_CREATED, include_in_schema=False)
def create_movie(movie_data: MovieCreate, collection: Collection = Depends(get_movie_collection)):
    """
    Add a movie

    - **title**, **actors**, **synopsis**, **image**: text (optional)
    - **categories**: list of labels (optional)

    Titles are not required to be unique.
    """
    return MovieService.create_movie(collection, movie_data)


@router.put("/{title:path}", response_model=MovieResponse)
def update_movie(
    title: str,
    movie_data: MovieUpdate,
    collection: Collection = Depends(get_movie_collection)
):
    """
    Replace a movie found by title

    This is a full replace, not a merge: fields missing from the body are
    stored as null. The body may change the title itself.
    """
    return MovieService.update_movie(collection, title, movie_data)


@router.delete("/{title:path}", response_model=MessageResponse)
def delete_movie(title: str, collection: Collection = Depends(get_movie_collection)):
    """Delete every movie with this title (ignoring case)"""
    MovieService.delete_movie(collection, title)
    return {"message": "Movie deleted"}
