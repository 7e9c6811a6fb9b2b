from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from artshop.api.guest_token import GuestTokenMiddleware
from artshop.api.health import router as health_router
from artshop.api.routes_catalogue import router as catalogue_router
from artshop.api.routes_discounts import router as discounts_router
from artshop.api.routes_feedback import router as feedback_router
from artshop.config import settings
from artshop.db import database
from artshop.services.auth_service import AuthError
from artshop.utils.logs import get_logger

log = get_logger("app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup
    app.state.database.init(reset=settings.RESET_DB)
    log.info(f"Backend API is running on http://{settings.APP_HOST}:{settings.APP_PORT}")
    try:
        yield
    finally:
        app.state.database.close()


app = FastAPI(title="Arts Store - Backend", version="0.1.0", lifespan=lifespan)
app.state.database = database

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.FRONTEND_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
)
app.add_middleware(GuestTokenMiddleware)


@app.exception_handler(AuthError)
async def auth_error_handler(request: Request, exc: AuthError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.message},
    )


app.include_router(health_router)

app.include_router(catalogue_router)

app.include_router(discounts_router)

app.include_router(feedback_router)
