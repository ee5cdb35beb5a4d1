from fastapi import APIRouter, Depends
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.models.user import User
from app.schemas.user import Token, SessionOut, SessionState, UserCreate, User as UserSchema
from app.auth.security import get_current_session, get_optional_session
from app.auth.session import SessionContext, SessionProvider
from app.services.views import resolve_landing

router = APIRouter(tags=["auth"])


def _session_out(db: Session, context: SessionContext) -> SessionOut:
    user = db.get(User, context.user_id)
    return SessionOut(
        user=UserSchema.model_validate(user),
        role=context.role,
        access_token=context.access_token,
        token_type="bearer",
    )

# SIGN-UP: identity + profile, returns user + token
@router.post("/signup", response_model=SessionOut)
def sign_up(
    user_data: UserCreate,
    db: Session = Depends(get_db)
):
    context = SessionProvider(db).sign_up(
        email=user_data.email,
        password=user_data.password,
        role=user_data.role,
        full_name=user_data.full_name,
    )
    return _session_out(db, context)

# LOGIN: returns user + token (frontend-friendly)
@router.post("/login", response_model=SessionOut)
def login_with_user(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db)
):
    context = SessionProvider(db).sign_in(form_data.username, form_data.password)
    return _session_out(db, context)

# TOKEN-ONLY: OAuth2 compatibility (for Swagger/OAuth2PasswordBearer)
@router.post("/token", response_model=Token)
def login_token_only(
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: Session = Depends(get_db)
):
    context = SessionProvider(db).sign_in(form_data.username, form_data.password)
    return {"access_token": context.access_token, "token_type": "bearer"}

@router.post("/logout")
def logout(
    context: SessionContext = Depends(get_current_session),
    db: Session = Depends(get_db)
):
    SessionProvider(db).sign_out(context)
    return {"ok": True}

# Current credential state; anonymous callers get authenticated=false
@router.get("/session", response_model=SessionState)
def read_session(
    context: SessionContext = Depends(get_optional_session),
    db: Session = Depends(get_db)
):
    if context is None:
        return SessionState(authenticated=False, landing=resolve_landing(None))
    user = db.get(User, context.user_id)
    return SessionState(
        authenticated=True,
        user=UserSchema.model_validate(user),
        role=context.role,
        landing=resolve_landing(context),
    )
