from fastapi import APIRouter, Depends, status, Query
from typing import List
from app.schemas.location import Location as LocationSchema, LocationCreate, LocationUpdate
from app.api.products import get_manager
from app.services.producer_catalog import ProducerCatalogManager

router = APIRouter()

@router.post("/", response_model=LocationSchema, status_code=status.HTTP_201_CREATED)
def create_location(
    location: LocationCreate,
    manager: ProducerCatalogManager = Depends(get_manager)
):
    return manager.create_location(location)

@router.get("/", response_model=List[LocationSchema])
def read_locations(manager: ProducerCatalogManager = Depends(get_manager)):
    return manager.list_locations()

@router.get("/{location_id}", response_model=LocationSchema)
def read_location(
    location_id: int,
    manager: ProducerCatalogManager = Depends(get_manager)
):
    return manager.get_location(location_id)

@router.put("/{location_id}", response_model=LocationSchema)
def update_location(
    location_id: int,
    location: LocationUpdate,
    manager: ProducerCatalogManager = Depends(get_manager)
):
    return manager.update_location(location_id, location)

@router.delete("/{location_id}")
def delete_location(
    location_id: int,
    confirm: bool = Query(False, description="Must be true to delete"),
    manager: ProducerCatalogManager = Depends(get_manager)
):
    manager.delete_location(location_id, confirm=confirm)
    return {"ok": True}
