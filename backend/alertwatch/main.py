from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from alertwatch.api.v1.routes.alerts import router as alerts_router
from alertwatch.api.v1.routes.health import router as health_router
from alertwatch.core.db import init_db


@asynccontextmanager
async def lifespan(app: FastAPI):
    # /v1/alerts reads alert_snapshots even before the first monitor run
    init_db()
    yield


app = FastAPI(title="Alertwatch API", lifespan=lifespan)

# Read-only public data: any origin may call the API with GET.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.include_router(health_router, prefix="/v1")
app.include_router(alerts_router)
