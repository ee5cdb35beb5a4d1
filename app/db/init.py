from app.models.user import User, AuthSession
from app.models.profile import Profile
from app.models.product import Product
from app.models.location import Location
from app.models.favorite import Favorite
from app.db.session import engine, Base

def init_db():
    # Create all tables
    Base.metadata.create_all(bind=engine)
