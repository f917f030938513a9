from contextlib import asynccontextmanager

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from activation import router as activation_router
from conversations import router as conversation_router
from core import db, log, settings
from event_users import router as event_user_router
from events import router as event_router
from parking import router as parking_router

log.configure_logging()


@asynccontextmanager
async def lifespan(_: FastAPI):
    # Initialize the DB pool once per process.
    await db.init_pool()
    try:
        if settings.db_auto_migrate():
            await db.apply_schema()
        yield
    finally:
        await db.close_pool()


app = FastAPI(title="Parking Copilot API", lifespan=lifespan)

# Allow the frontend dev server to call this API from the browser (with cookies).
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)
app.middleware("http")(log.log_requests)
app.add_exception_handler(StarletteHTTPException, log.http_error)

app.include_router(conversation_router.router, prefix="/api/conversations", tags=["conversations"])
app.include_router(event_user_router.router, prefix="/api/event-users", tags=["event-users"])
app.include_router(event_router.router, prefix="/api/events", tags=["events"])
app.include_router(activation_router.router, prefix="/api", tags=["activation"])
app.include_router(parking_router.router, prefix="/api/parking", tags=["parking"])


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


@app.get("/")
def root() -> dict:
    return {"message": "parking-copilot api"}

