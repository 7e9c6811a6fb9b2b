from typing import Any

from fastapi import APIRouter, Body, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from artshop.api.guest_token import get_guest_token
from artshop.db import get_db
from artshop.schemas.discount_schema import discount_to_dict
from artshop.services.discount_service import DiscountService, InvalidDiscount
from artshop.utils.logs import get_logger

log = get_logger("discounts")

router = APIRouter(prefix="/discounts", tags=["discounts"])


@router.get("", summary="List active discounts")
def list_discounts(request: Request, db: Session = Depends(get_db)):
    svc = DiscountService(db)
    try:
        discounts = svc.list_active()
    except SQLAlchemyError:
        log.exception("Error fetching discounts")
        return JSONResponse(status_code=500, content={"message": "Server error fetching discounts"})
    return {
        "guestToken": get_guest_token(request),
        "discounts": [discount_to_dict(d) for d in discounts],
    }


@router.post("/validate", summary="Validate a discount code")
def validate_discount(
    request: Request,
    payload: Any = Body(None),
    db: Session = Depends(get_db),
):
    """
    payload: { "code": "ARTS10" }
    """
    code = payload.get("code") if isinstance(payload, dict) else None
    svc = DiscountService(db)
    try:
        discount = svc.validate(code)
    except InvalidDiscount as e:
        return JSONResponse(status_code=400, content={"valid": False, "message": str(e)})
    except SQLAlchemyError:
        log.exception("Error validating discount")
        return JSONResponse(
            status_code=500,
            content={"valid": False, "message": "Server error while validating discount"},
        )
    return {
        "valid": True,
        "guestToken": get_guest_token(request),
        "discount": discount,
        "message": "Discount code is valid",
    }
