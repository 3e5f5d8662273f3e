import logging
from typing import List, Union

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .. import schemas, crud, auth
from ..database import get_db

logger = logging.getLogger("hotel_booking.catalog")

router = APIRouter(tags=["Properties"])


def _storage_error(db: Session, action: str, e: SQLAlchemyError) -> HTTPException:
    db.rollback()
    logger.error(f"Error {action}: {e}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Error {action}: {e}"
    )


@router.post("/add_property", response_model=schemas.CreatedResponse, status_code=status.HTTP_201_CREATED)
def add_property(
        property: schemas.PropertyCreate,
        db: Session = Depends(get_db),
        current_email: str = Depends(auth.require_staff)
):
    try:
        db_property = crud.create_property(db=db, property=property)
    except SQLAlchemyError as e:
        raise _storage_error(db, "adding property", e)

    logger.info(f"{current_email} added property {db_property.id}")
    return {"message": "Property added successfully", "id": db_property.id}


@router.post("/add_room", response_model=schemas.CreatedResponse, status_code=status.HTTP_201_CREATED)
def add_room(
        room: schemas.RoomCreate,
        db: Session = Depends(get_db),
        current_email: str = Depends(auth.require_staff)
):
    if crud.get_property(db, property_id=room.property_id) is None:
        raise HTTPException(status_code=404, detail="Property not found")

    try:
        db_room = crud.create_room(db=db, room=room)
    except SQLAlchemyError as e:
        raise _storage_error(db, "adding room", e)

    logger.info(f"{current_email} added room {db_room.id} to property {room.property_id}")
    return {"message": "Room added successfully", "id": db_room.id}


@router.put("/update_room_status", response_model=schemas.MessageResponse)
def update_room_status(
        update: schemas.RoomStatusUpdate,
        db: Session = Depends(get_db),
        current_email: str = Depends(auth.require_staff)
):
    try:
        updated = crud.update_room_status(db=db, room_id=update.room_id, status=update.status)
    except SQLAlchemyError as e:
        raise _storage_error(db, "updating room status", e)

    if not updated:
        raise HTTPException(status_code=404, detail="Room not found")

    logger.info(f"{current_email} set room {update.room_id} to {update.status.value}")
    return {"message": "Room status updated successfully"}


@router.post("/search_rooms", response_model=Union[List[schemas.RoomRead], schemas.MessageResponse])
def search_rooms(
        search: schemas.RoomSearch,
        db: Session = Depends(get_db),
        current_email: str = Depends(auth.require_customer)
):
    """
    Search rooms by property name, room type and an inclusive price range.
    """
    if search.min_price is not None and search.max_price is not None \
            and search.min_price > search.max_price:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="min_price cannot be greater than max_price"
        )

    try:
        rows = crud.search_rooms(
            db,
            property_name=search.property_name,
            room_type=search.room_type,
            min_price=search.min_price,
            max_price=search.max_price,
        )
    except SQLAlchemyError as e:
        raise _storage_error(db, "searching rooms", e)

    if not rows:
        return {"message": "No rooms found"}

    return [
        schemas.RoomRead(
            id=room.id,
            property_id=room.property_id,
            property_name=property_name,
            room_name=room.room_name,
            room_type=room.room_type,
            price_per_night=room.price_per_night,
            status=room.status,
        )
        for room, property_name in rows
    ]
