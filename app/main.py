from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.config import settings
from app.db.init import init_db
from app.api import users, products, locations, catalog, favorites
from app.auth.jwt import router as auth_router
from app.logger import get_logger

log = get_logger("main")

app = FastAPI(
    title="seasonal-market",
    description="Backend API for the seasonal produce marketplace",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Initialize database
@app.on_event("startup")
async def startup_event():
    settings.validate()
    init_db()
    log.info("Database ready (week starts %s, %s matching)", settings.WEEK_START, settings.AVAILABILITY_MATCH)

# Include routers
app.include_router(auth_router, prefix="/auth", tags=["auth"])
app.include_router(users.router, prefix="/users", tags=["users"])
app.include_router(catalog.router, prefix="/catalog", tags=["catalog"])
app.include_router(favorites.router, prefix="/favorites", tags=["favorites"])
app.include_router(products.router, prefix="/products", tags=["products"])
app.include_router(locations.router, prefix="/locations", tags=["locations"])

@app.get("/")
def read_root():
    return {"message": "Welcome to the seasonal produce marketplace API"}
