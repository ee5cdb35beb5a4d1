from typing import Optional
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from app.db.session import get_db
from app.auth.security import get_optional_session
from app.auth.session import SessionContext
from app.schemas.catalog import FavoriteList, FavoriteToggle
from app.services.favorites import FavoritesStore

router = APIRouter()


def get_store(
    db: Session = Depends(get_db),
    current_session: Optional[SessionContext] = Depends(get_optional_session)
) -> FavoritesStore:
    store = FavoritesStore(db, current_session.user_id if current_session else None)
    store.load()
    return store

@router.get("/", response_model=FavoriteList)
def read_favorites(store: FavoritesStore = Depends(get_store)):
    return FavoriteList(product_ids=sorted(store.product_ids))

@router.post("/{product_id}/toggle", response_model=FavoriteToggle)
def toggle_favorite(
    product_id: int,
    store: FavoritesStore = Depends(get_store)
):
    return FavoriteToggle(product_id=product_id, is_favorite=store.toggle(product_id))

@router.delete("/{product_id}", response_model=FavoriteToggle)
def remove_favorite(
    product_id: int,
    store: FavoritesStore = Depends(get_store)
):
    store.remove(product_id)
    return FavoriteToggle(product_id=product_id, is_favorite=False)
