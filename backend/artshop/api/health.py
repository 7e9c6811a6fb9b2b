from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

router = APIRouter()


@router.get("/", response_class=PlainTextResponse, include_in_schema=False)
def root():
    return "Backend API is running"


@router.get("/health", tags=["health"])
def health(request: Request):
    db_ok = False
    try:
        with request.app.state.database.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
            db_ok = True
    except SQLAlchemyError:
        db_ok = False

    return {
        "status": "ok" if db_ok else "degraded",
        "db": db_ok,
    }
