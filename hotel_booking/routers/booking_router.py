import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .. import schemas, crud, auth
from ..database import get_db

logger = logging.getLogger("hotel_booking.booking")

router = APIRouter(tags=["Bookings"])


@router.post("/booking", response_model=schemas.BookingResult, status_code=status.HTTP_201_CREATED)
def create_booking(
        booking: schemas.BookingCreate,
        db: Session = Depends(get_db),
        current_email: str = Depends(auth.require_customer)
):
    """
    Book one or more rooms and record the payment, all in a single transaction.
    """
    try:
        booking_ids, total_price = crud.create_booking(db=db, booking=booking)
    except crud.BookingValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except crud.RoomNotFoundError as e:
        logger.warning(f"Booking by {current_email} rolled back: {e}")
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except SQLAlchemyError as e:
        logger.error(f"Booking by {current_email} rolled back: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Error creating booking: {e}"
        )

    logger.info(f"Created bookings {booking_ids} for customer {booking.customer_id}, total {total_price}")
    return schemas.BookingResult(booking_ids=booking_ids, total_price=total_price)
