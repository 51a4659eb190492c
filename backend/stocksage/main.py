import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from stocksage.core.config import settings
from stocksage.api import share, shared_page


def configure_logging() -> None:
    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s" if settings.debug
        else "%(levelname)-8s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()

    if settings.share_store == "sqlite":
        from stocksage.core.database import init_db
        init_db()

    yield


app = FastAPI(title=settings.app_name, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(share.router, prefix="/api/share", tags=["share"])
app.include_router(shared_page.router, prefix="/shared", tags=["shared"])


@app.get("/api/health")
async def health():
    return {"status": "ok", "app": settings.app_name}
