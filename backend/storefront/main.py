from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront.api.health import router as health_router
from storefront.api.routes_auth import router as auth_router
from storefront.api.routes_products import router as products_router
from storefront.config import settings
from storefront.db import init_db
from storefront.logging_config import configure_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup
    log = configure_logging(settings.LOG_LEVEL)
    if settings.RESET_DB:
        log.warning("RESET_DB set, dropping and recreating tables")
    init_db(reset=settings.RESET_DB)
    yield


app = FastAPI(title="Storefront - Backend", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.FRONTEND_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router, prefix="/api", tags=["health"])

app.include_router(auth_router, tags=["auth"])

app.include_router(products_router, prefix="/api/products", tags=["products"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("storefront.main:app", host=settings.APP_HOST, port=settings.APP_PORT)
