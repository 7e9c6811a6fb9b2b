from typing import Any, Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from artshop.api.deps import admin_json_body
from artshop.api.guest_token import get_guest_token
from artshop.db import get_db
from artshop.schemas.product_schema import product_to_dict, suggestion_to_dict
from artshop.services.catalogue_service import (
    CatalogueService,
    CatalogueValidationError,
    DuplicateProduct,
    ProductNotFound,
)
from artshop.services.query_builder import build_product_query
from artshop.utils.logs import get_logger

log = get_logger("catalogue")

router = APIRouter(prefix="/products", tags=["catalogue"])


def _server_error(message: str) -> JSONResponse:
    return JSONResponse(status_code=500, content={"status": 500, "message": message})


@router.get("", summary="List products")
def list_products(
    request: Request,
    category: Optional[str] = Query(None, description="comma separated category names"),
    title: Optional[str] = Query(None, description="case-insensitive title fragment"),
    type: Optional[str] = Query(None, description="comma separated product types"),
    available: Optional[str] = Query(None, description="'true' for available only"),
    min: Optional[str] = Query(None, description="lower price bound, needs max"),
    max: Optional[str] = Query(None, description="upper price bound, needs min"),
    sort: Optional[str] = Query(None, description="best-selling | low-to-high | high-to-low | newest"),
    page: Optional[str] = Query(None),
    limit: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    # raw strings on purpose: bad numbers degrade to "not given" instead of a 422
    query = build_product_query(
        category=category,
        title=title,
        type=type,
        available=available,
        min=min,
        max=max,
        sort=sort,
        page=page,
        limit=limit,
    )
    svc = CatalogueService(db)
    try:
        items, pagination = svc.list_products(query)
    except SQLAlchemyError:
        log.exception("Error fetching products")
        return _server_error("Server error while fetching products")

    return {
        "data": {
            "status": 200,
            "guestToken": get_guest_token(request),
            "count": len(items),
            "data": [product_to_dict(p) for p in items],
            "message": "Products fetched successfully" if items else "No products found",
        },
        "pagination": pagination.as_dict(),
    }


@router.get("/suggestions", summary="Title suggestions for a search box")
def suggestions(
    search: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    svc = CatalogueService(db)
    try:
        items = svc.suggest(search)
    except CatalogueValidationError as e:
        return JSONResponse(status_code=400, content={"status": 400, "message": str(e)})
    except SQLAlchemyError:
        log.exception("Error fetching suggestions")
        return _server_error("Server error while fetching suggestions")

    if not items:
        return {"status": 204, "count": 0, "data": [], "message": "No matching products"}
    return {
        "status": 200,
        "count": len(items),
        "data": [suggestion_to_dict(p) for p in items],
        "message": "Suggestions fetched successfully",
    }


@router.post("/addProducts", status_code=201, summary="Create a product (admin)")
def add_product(
    payload: Any = Depends(admin_json_body),
    db: Session = Depends(get_db),
):
    svc = CatalogueService(db)
    try:
        p = svc.create_product(payload)
    except CatalogueValidationError as e:
        return JSONResponse(
            status_code=400,
            content={"status": 400, "message": str(e), "errors": e.errors},
        )
    except DuplicateProduct as e:
        return JSONResponse(status_code=400, content={"status": 400, "message": str(e)})
    except SQLAlchemyError:
        log.exception("Error creating product")
        return _server_error("Server error while creating product")

    return {
        "status": 201,
        "data": product_to_dict(p),
        "message": "Product created successfully",
    }


@router.get("/{product_id}", summary="Get product by id")
def get_product(product_id: str, db: Session = Depends(get_db)):
    svc = CatalogueService(db)
    try:
        p = svc.get_product(product_id)
    except ProductNotFound as e:
        return JSONResponse(status_code=404, content={"status": 404, "message": str(e)})
    except SQLAlchemyError:
        log.exception("Error fetching product")
        return _server_error("Server error")

    return {
        "status": 200,
        "data": product_to_dict(p),
        "message": "Product fetched successfully",
    }
