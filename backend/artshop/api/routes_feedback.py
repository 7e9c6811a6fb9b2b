from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from artshop.db import get_db
from artshop.schemas.testimonial_schema import testimonial_to_dict
from artshop.services.testimonial_service import TestimonialService
from artshop.utils.logs import get_logger

log = get_logger("feedback")

router = APIRouter(prefix="/feedback", tags=["feedback"])


@router.get("", summary="List testimonials, newest first")
def list_feedback(db: Session = Depends(get_db)):
    svc = TestimonialService(db)
    try:
        feedbacks = svc.list_newest_first()
    except SQLAlchemyError:
        log.exception("Error fetching feedback")
        return JSONResponse(status_code=500, content={"message": "Server Error"})
    return [testimonial_to_dict(t) for t in feedbacks]
