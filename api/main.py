import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from comments import router as comments_router
from core import settings
from core.errors import install_exception_handlers
from core.log import configure_logging
from core.startup import StartupSequence
from poems import router as poems_router
from poets import router as poets_router

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Pool + probe must succeed before any request is served; a StartupError
    # here makes uvicorn abort the process.
    startup: StartupSequence = app.state.startup
    await startup.start()
    try:
        yield
    finally:
        await startup.stop()


app = FastAPI(title="poetry-graph-api", lifespan=lifespan)
app.state.startup = StartupSequence()

# The reading client is served from anywhere; no credentials are involved.
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins(),
    allow_credentials=False,
    allow_methods=["GET", "HEAD", "PUT", "PATCH", "POST", "DELETE"],
    allow_headers=["*"],
)

install_exception_handlers(app)

app.include_router(poets_router.router, tags=["relationships"])
app.include_router(poems_router.router, tags=["poems"])
app.include_router(comments_router.router, tags=["comments"])


@app.get("/health")
def health() -> dict:
    return {"status": "ok", "startup": app.state.startup.state.value}


@app.get("/")
def root() -> dict:
    return {"message": "poetry-graph api"}


def run() -> None:
    logger.info("starting host=%s port=%s", settings.api_host(), settings.api_port())
    uvicorn.run(app, host=settings.api_host(), port=settings.api_port())


if __name__ == "__main__":
    run()
