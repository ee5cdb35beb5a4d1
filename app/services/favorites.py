from typing import Optional, Set

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.logger import get_logger
from app.models.favorite import Favorite
from app.models.product import Product
from app.services.errors import AuthRequired, FavoriteUpdateFailed, NotFoundError

log = get_logger("favorites")


class FavoritesStore:
    """A user's favorite product ids, mirrored in memory.

    ``user_id`` may be None for an anonymous visitor: reads return nothing
    and writes ask the visitor to sign in.
    """

    def __init__(self, db: Session, user_id: Optional[int]):
        self.db = db
        self.user_id = user_id
        self.product_ids: Set[int] = set()

    def load(self) -> Set[int]:
        if self.user_id is None:
            self.product_ids = set()
            return self.product_ids
        try:
            rows = (
                self.db.query(Favorite.product_id)
                .filter(Favorite.user_id == self.user_id)
                .all()
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            log.error("Error fetching favorites for user %s: %s", self.user_id, e)
            return self.product_ids
        self.product_ids = {row.product_id for row in rows}
        return self.product_ids

    def is_favorite(self, product_id: int) -> bool:
        return product_id in self.product_ids

    def toggle(self, product_id: int) -> bool:
        """Flip membership of ``product_id`` and return the new state.

        Memory is updated before the write and restored if the write fails.
        """
        if self.user_id is None:
            raise AuthRequired("Please sign in to add favorites")

        previous = set(self.product_ids)
        if product_id in self.product_ids:
            self.product_ids.discard(product_id)
            write = self._delete
        else:
            if self.db.get(Product, product_id) is None:
                raise NotFoundError("Product not found")
            self.product_ids.add(product_id)
            write = self._insert

        try:
            write(product_id)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            self.product_ids = previous
            log.error("Error toggling favorite %s for user %s: %s", product_id, self.user_id, e)
            raise FavoriteUpdateFailed()
        return product_id in self.product_ids

    def remove(self, product_id: int):
        """Delete the pair if present; a missing pair is not an error."""
        if self.user_id is None:
            raise AuthRequired("Please sign in to manage favorites")
        try:
            self._delete(product_id)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            log.error("Error removing favorite %s for user %s: %s", product_id, self.user_id, e)
            raise FavoriteUpdateFailed()
        self.product_ids.discard(product_id)

    def _insert(self, product_id: int):
        self.db.add(Favorite(user_id=self.user_id, product_id=product_id))
        self.db.flush()

    def _delete(self, product_id: int):
        self.db.query(Favorite).filter(
            Favorite.user_id == self.user_id,
            Favorite.product_id == product_id,
        ).delete(synchronize_session=False)
