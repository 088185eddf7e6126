from typing import List

from fastapi import APIRouter, Depends

from trackstore.api.deps import get_genre_catalog
from trackstore.data import GenreCatalog

router = APIRouter()


@router.get("/genres", response_model=List[str])
def get_genres(catalog: GenreCatalog = Depends(get_genre_catalog)) -> List[str]:
    """
    Return the genre vocabulary. An unreadable genre file yields [].
    """
    return catalog.list()
