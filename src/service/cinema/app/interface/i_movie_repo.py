from abc import ABC, abstractmethod
from typing import List, Optional

from src.service.cinema.domain.entity.movie_entity import Genre, Movie
from src.service.cinema.domain.enum.movie_status import MovieStatus


class IMovieRepo(ABC):
    """Catalog persistence for movies and genres"""

    @abstractmethod
    async def get_by_id(self, *, movie_id: int) -> Movie | None:
        pass

    @abstractmethod
    async def list_movies(
        self, *, status: Optional[MovieStatus] = None, limit: Optional[int] = None
    ) -> List[Movie]:
        pass

    @abstractmethod
    async def search(self, *, query: str) -> List[Movie]:
        """Case-insensitive match on title or genre name, now showing first."""
        pass

    @abstractmethod
    async def list_by_genre(self, *, genre_id: int) -> List[Movie]:
        pass

    @abstractmethod
    async def list_genres(self) -> List[Genre]:
        pass

    @abstractmethod
    async def create_genre(self, *, genre: Genre) -> Genre:
        pass

    @abstractmethod
    async def create(self, *, movie: Movie, genre_ids: List[int]) -> Movie:
        pass

    @abstractmethod
    async def update(self, *, movie: Movie, genre_ids: Optional[List[int]] = None) -> Movie:
        pass

    @abstractmethod
    async def delete(self, *, movie_id: int) -> None:
        pass

    @abstractmethod
    async def count_showtimes(self, *, movie_id: int) -> int:
        pass
