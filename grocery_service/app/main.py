import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from shared.core.config import settings
from shared.core.database import Base, grocery_engine
from shared.helpers.exception_handler import setup_exception_handlers
from shared.models import users
from shared.wrappers.response_wrapper import JsonResponseMiddleware
from .models.family import families, family_members
from .models.inventory import inventory_items
from .models.procurement import merchants, order_items, orders
from .models.system import notification_reads, notifications
from .router.family import family_router
from .router.inventory import inventory_items_router
from .router.procurement import merchants_router, orders_router
from .router.system import notifications_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)

app = FastAPI(title="Grocery Service API")

# Create all tables
Base.metadata.create_all(bind=grocery_engine)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(JsonResponseMiddleware)

setup_exception_handlers(app)

# Include routers
app.include_router(family_router.router)
app.include_router(inventory_items_router.router)
app.include_router(merchants_router.router)
app.include_router(orders_router.router)
app.include_router(notifications_router.router)


@app.get("/api/health")
def health_check():
    return {"status": "healthy"}
