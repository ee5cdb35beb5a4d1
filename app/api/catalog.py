from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from app.db.session import get_db
from app.auth.security import get_optional_session, is_producer
from app.auth.session import SessionContext
from app.schemas.catalog import CatalogWeek, MatchMode, ProducerDashboard, Week
from app.services.catalog import CatalogQueryService
from app.services.favorites import FavoritesStore
from app.services.producer_catalog import ProducerCatalogManager
from app.services.views import WeekCalendarView

router = APIRouter()

@router.get(
    "/week",
    response_model=CatalogWeek,
    summary="Products of the week",
    description="Products available in the week containing the given date."
)
def read_week(
    day: Optional[date] = Query(None, alias="date", description="Reference date, defaults to today"),
    match: Optional[MatchMode] = Query(None, description="contained or overlap"),
    seq: Optional[int] = Query(None, description="Client request number, echoed back"),
    db: Session = Depends(get_db),
    current_session: Optional[SessionContext] = Depends(get_optional_session)
):
    """
    Weekly calendar feed.

    - **date**: any day of the wanted week (default: today)
    - **match**: `contained` keeps products whose whole window lies in the
      week, `overlap` keeps any product available on at least one day of it
    - **seq**: opaque request number returned unchanged, so a client can
      drop responses that arrive after a newer request
    """
    catalog = CatalogQueryService(db)
    view = WeekCalendarView(today=day or date.today(), week_start=catalog.week_start)
    token = view.begin_load()
    view.complete_load(token, catalog.fetch_week(view.selected_date, match=match))

    user_id = current_session.user_id if current_session else None
    view.set_favorites(FavoritesStore(db, user_id).load())

    window = view.week
    return CatalogWeek(
        seq=seq,
        match=match or catalog.match,
        week=Week(
            start=window.start,
            end=window.end,
            selected=view.selected_date,
            days=view.week_days(),
        ),
        products=view.cards(),
    )

@router.get("/dashboard", response_model=ProducerDashboard)
def read_dashboard(
    db: Session = Depends(get_db),
    current_session: SessionContext = Depends(is_producer)
):
    return ProducerCatalogManager(db, current_session).dashboard()
