"""Shopping list API endpoints: aggregation plus the stored reference list."""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response

from grocer.domain.ShoppingList import ShoppingList
from grocer.domain.errors import ClientInputError, StorageError
from grocer.infra.pdf_utils import generate_pdf_for_shopping_list
from grocer.logic.shopping import references
from grocer.logic.shopping.list_builder import aggregate
from grocer.utilities.config import AppSettings, get_settings
from grocer.utilities.validators import AddItemRequest, RecipeRequest, RemoveItemRequest

router = APIRouter(prefix="/api/shopping_list")


def _aggregate_stored(settings: AppSettings) -> ShoppingList:
    try:
        return references.aggregate_stored(settings)
    except ClientInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))


@router.post("")
def shopping_list(entries: List[RecipeRequest], settings: AppSettings = Depends(get_settings)):
    try:
        result = aggregate(entries, settings)
    except ClientInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return result.to_dict()


@router.get("/current")
def current_shopping_list(settings: AppSettings = Depends(get_settings)):
    return _aggregate_stored(settings).to_dict()


@router.get("/pdf")
def shopping_list_pdf(settings: AppSettings = Depends(get_settings)):
    pdf = generate_pdf_for_shopping_list(_aggregate_stored(settings))
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": 'attachment; filename="shopping_list.pdf"'},
    )


@router.get("/items")
def get_shopping_list_items(settings: AppSettings = Depends(get_settings)):
    try:
        items = references.list_references(settings)
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return [item.to_dict() for item in items]


@router.post("/add")
def add_to_shopping_list(payload: AddItemRequest, settings: AppSettings = Depends(get_settings)):
    try:
        item = references.add_reference(payload, settings)
    except ClientInputError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return {"status": "ok", "path": item.path}


@router.post("/remove")
def remove_from_shopping_list(payload: RemoveItemRequest, settings: AppSettings = Depends(get_settings)):
    try:
        references.remove_reference(payload.path, settings)
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return {"status": "ok"}


@router.post("/clear")
def clear_shopping_list(settings: AppSettings = Depends(get_settings)):
    try:
        references.clear_references(settings)
    except StorageError as e:
        raise HTTPException(status_code=500, detail=str(e))
    return {"status": "ok"}
