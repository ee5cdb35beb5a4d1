from datetime import date
from typing import List, Optional

from sqlalchemy import and_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from app.config import MATCH_MODES, settings
from app.logger import get_logger
from app.models.product import Product
from app.models.profile import Profile
from app.services.errors import CatalogUnavailable
from app.services.week import WeekWindow, week_window

log = get_logger("catalog")


def availability_filter(window: WeekWindow, match: str):
    """SQL predicate selecting products that belong to ``window``.

    ``contained``: the whole availability range lies inside the week, so a
    product spanning two weeks shows in neither. ``overlap``: any shared day.
    """
    if match == "contained":
        return and_(
            Product.availability_start >= window.start,
            Product.availability_end <= window.end,
        )
    if match == "overlap":
        return and_(
            Product.availability_start <= window.end,
            Product.availability_end >= window.start,
        )
    raise ValueError(f"Unknown match mode: {match}")


class CatalogQueryService:
    def __init__(self, db: Session, week_start: Optional[int] = None, match: Optional[str] = None):
        self.db = db
        self.week_start = settings.week_start_index() if week_start is None else week_start
        self.match = match or settings.AVAILABILITY_MATCH
        if self.match not in MATCH_MODES:
            raise ValueError(f"Unknown match mode: {self.match}")

    def window_for(self, reference: date) -> WeekWindow:
        return week_window(reference, self.week_start)

    def fetch_week(self, reference: date, match: Optional[str] = None) -> List[Product]:
        """Products available in the week containing ``reference``.

        Each product comes with its producer profile and that producer's
        sale locations loaded.
        """
        window = self.window_for(reference)
        predicate = availability_filter(window, match or self.match)
        try:
            return (
                self.db.query(Product)
                .options(joinedload(Product.producer).selectinload(Profile.locations))
                .filter(predicate)
                .order_by(Product.id)
                .all()
            )
        except SQLAlchemyError as e:
            self.db.rollback()
            log.error("Error fetching products for week %s..%s: %s", window.start, window.end, e)
            raise CatalogUnavailable()
