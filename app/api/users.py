from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.models.profile import Profile as ProfileModel
from app.schemas.user import Profile as ProfileSchema, ProfileUpdate
from app.auth.security import get_current_session
from app.auth.session import SessionContext

router = APIRouter()


def _own_profile(db: Session, current_session: SessionContext) -> ProfileModel:
    profile = db.get(ProfileModel, current_session.user_id)
    if profile is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile

# --------------------------------------------------------------------
# Get current profile -> GET /users/me
# --------------------------------------------------------------------
@router.get("/me", response_model=ProfileSchema)
def read_profile_me(
    db: Session = Depends(get_db),
    current_session: SessionContext = Depends(get_current_session)
):
    return ProfileSchema.model_validate(_own_profile(db, current_session))

# --------------------------------------------------------------------
# Update current profile (display name only, role is fixed) -> PUT /users/me
# --------------------------------------------------------------------
@router.put("/me", response_model=ProfileSchema)
def update_profile_me(
    profile: ProfileUpdate,
    db: Session = Depends(get_db),
    current_session: SessionContext = Depends(get_current_session)
):
    db_profile = _own_profile(db, current_session)

    for field, value in profile.model_dump(exclude_unset=True).items():
        setattr(db_profile, field, value)

    db.add(db_profile)
    db.commit()
    db.refresh(db_profile)
    return ProfileSchema.model_validate(db_profile)
