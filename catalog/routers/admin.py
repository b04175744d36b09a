# catalog/routers/admin.py
# Responsibility: Admin-only catalog management (CRUD, CSV upload, category cleanup).

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile
from pydantic import BaseModel, Field

from catalog.services.auth import require_admin
from catalog.services.csv_importer import CSVImportError
from catalog.services.inventory_service import InventoryService, get_inventory_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/inventory",
    tags=["Admin"],
    dependencies=[Depends(require_admin)]
)

# --- Pydantic Models ---
class ItemPayload(BaseModel):
    name: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    imageurl: Optional[str] = None
    comment: Optional[str] = None

class Item(ItemPayload):
    id: int

class BatchResponse(BaseModel):
    message: str
    count: int

# --- Endpoints ---
@router.get("/admin", response_model=List[Item])
def list_items_endpoint(service: InventoryService = Depends(get_inventory_service)):
    """Returns every item ordered by category."""
    try:
        return service.list_items()
    except Exception as e:
        logger.exception("[Admin] Listing items failed: %s", e)
        raise HTTPException(status_code=500, detail="Internal server error")

@router.post("/fix-data", response_model=BatchResponse)
def fix_data_endpoint(service: InventoryService = Depends(get_inventory_service)):
    """
    Cleans up every stored category path in one atomic batch.
    Safe to repeat: a second run on clean data reports 0.
    """
    try:
        count = service.sanitize_categories()
    except Exception as e:
        logger.exception("[Admin] Category cleanup failed: %s", e)
        raise HTTPException(status_code=500, detail="Transaction failed.")

    return BatchResponse(message=f"Cleaned {count} items.", count=count)

@router.post("/upload", response_model=BatchResponse, status_code=201)
def upload_csv_endpoint(
    csvFile: Optional[UploadFile] = File(None),
    service: InventoryService = Depends(get_inventory_service)
):
    """
    Bulk import from a CSV with 'name' and 'category' columns
    ('imageurl' and 'comment' optional).
    """
    if csvFile is None:
        raise HTTPException(status_code=400, detail="No file uploaded.")

    try:
        content = csvFile.file.read()
    finally:
        csvFile.file.close()

    try:
        count = service.import_csv(content)
    except CSVImportError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("[Admin] CSV import failed: %s", e)
        raise HTTPException(status_code=500, detail="Database transaction failed.")

    return BatchResponse(message=f"Added {count} items.", count=count)

@router.get("/{item_id}", response_model=Item)
def get_item_endpoint(item_id: int, service: InventoryService = Depends(get_inventory_service)):
    try:
        item = service.get_item(item_id)
    except Exception as e:
        logger.exception("[Admin] Fetching item %s failed: %s", item_id, e)
        raise HTTPException(status_code=500, detail="Internal server error")

    if item is None:
        raise HTTPException(status_code=404, detail="Item not found")
    return item

@router.post("", response_model=Item)
def create_item_endpoint(payload: ItemPayload, service: InventoryService = Depends(get_inventory_service)):
    try:
        return service.create_item(payload.model_dump())
    except Exception as e:
        logger.exception("[Admin] Creating item failed: %s", e)
        raise HTTPException(status_code=500, detail="Internal server error")

@router.put("/{item_id}")
def update_item_endpoint(
    item_id: int,
    payload: ItemPayload,
    service: InventoryService = Depends(get_inventory_service)
):
    try:
        updated = service.update_item(item_id, payload.model_dump())
    except Exception as e:
        logger.exception("[Admin] Updating item %s failed: %s", item_id, e)
        raise HTTPException(status_code=500, detail="Internal server error")

    if not updated:
        raise HTTPException(status_code=404, detail="Item not found")
    return {"message": "Update successful"}

@router.delete("/{item_id}")
def delete_item_endpoint(item_id: int, service: InventoryService = Depends(get_inventory_service)):
    try:
        deleted = service.delete_item(item_id)
    except Exception as e:
        logger.exception("[Admin] Deleting item %s failed: %s", item_id, e)
        raise HTTPException(status_code=500, detail="Internal server error")

    if not deleted:
        raise HTTPException(status_code=404, detail="Item not found")
    return {"message": "Delete successful"}
