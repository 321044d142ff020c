"""Main FastAPI application."""
from fastapi import FastAPI
from contextlib import asynccontextmanager

from marketplace.core.config import settings
from marketplace.core.logging import setup_logging
from marketplace.db.database import init_db
from marketplace.api import auth, health, merchant, orders, restaurants, reviews
from marketplace.api.responses import register_error_handlers


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    setup_logging()
    await init_db()
    yield


app = FastAPI(
    title=settings.app_name,
    description="Cart checkout, order lifecycle and reviews for a food ordering marketplace",
    version="0.1.0",
    lifespan=lifespan,
)

register_error_handlers(app)

app.include_router(health.router, tags=["health"])
app.include_router(auth.router, tags=["auth"])
app.include_router(restaurants.router, tags=["restaurants"])
app.include_router(orders.router, tags=["orders"])
app.include_router(merchant.router, tags=["merchant"])
app.include_router(reviews.router, tags=["reviews"])


@app.get("/")
async def root():
    """Service banner."""
    return {"message": f"{settings.app_name} is running", "version": "0.1.0"}
