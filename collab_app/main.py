import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI, HTTPException
from fastapi.responses import FileResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles

from collab_app import config
from collab_app.rooms.registry import RoomRegistry
from collab_app.rooms.sweeper import room_sweeper_loop
from collab_app.session.router import router as session_router

logging.basicConfig(
    level=getattr(logging, config.LOG_LEVEL, logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

GUI_DIR = Path(config.GUI_DIR)


# --- Lifespan ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.registry = RoomRegistry()
    sweeper = None
    if config.ROOM_TTL_SECONDS > 0:
        sweeper = asyncio.create_task(
            room_sweeper_loop(
                app.state.registry,
                config.ROOM_TTL_SECONDS,
                config.ROOM_SWEEP_INTERVAL_SECONDS,
            )
        )
        logger.info("Idle room eviction enabled (ttl=%ss)", config.ROOM_TTL_SECONDS)
    yield
    if sweeper is not None:
        sweeper.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await sweeper


# --- App Initialization ---
app = FastAPI(lifespan=lifespan)

# --- Routers ---
app.include_router(session_router)


# --- Basic Routes ---
@app.get("/health", response_class=PlainTextResponse)
def health():
    return "ok"


app.mount("/gui", StaticFiles(directory=GUI_DIR, check_dir=False), name="gui")


@app.api_route("/{full_path:path}", methods=["GET", "HEAD"], include_in_schema=False)
def index(full_path: str):
    index_file = GUI_DIR / "index.html"
    if not index_file.is_file():
        raise HTTPException(status_code=404, detail="Not Found")
    return FileResponse(index_file)


def run():
    uvicorn.run(app, host=config.HOST, port=config.PORT, log_level=config.LOG_LEVEL.lower())


if __name__ == "__main__":
    run()
