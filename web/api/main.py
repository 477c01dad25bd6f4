"""FastAPI site API - settings/theming, admin auth, site content and lead capture."""
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import config
from portal.models.base import async_session_factory, init_db
from portal.services.seed import seed_content

from web.api.auth_routes import router as auth_router
from web.api.content_routes import router as content_router
from web.api.lead_routes import router as lead_router
from web.api.settings_routes import router as settings_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    if config.SEED_CONTENT:
        await seed_content(async_session_factory)
    yield


app = FastAPI(title="Edufly Site API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.include_router(auth_router)
app.include_router(settings_router)
app.include_router(content_router)
app.include_router(lead_router)


@app.get("/api/health")
async def health():
    return {"status": "ok"}
