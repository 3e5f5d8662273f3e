import datetime
import logging
import re
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from . import models, schemas, auth

logger = logging.getLogger("hotel_booking.crud")

DATE_FORMAT = "%Y-%m-%d"
# strptime alone would accept unpadded months and days
DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


class BookingValidationError(ValueError):
    """Booking request rejected before any row is written."""


class RoomNotFoundError(LookupError):
    def __init__(self, room_id: int):
        self.room_id = room_id
        super().__init__(f"Room with ID {room_id} not found")


# --- Users ---

def get_user_by_email(db: Session, email: str):
    return db.query(models.User).filter(models.User.email == email).first()


def create_user(db: Session, user: schemas.UserCreate):
    db_user = models.User(
        name=user.name,
        email=user.email,
        password_hash=auth.hash_password(user.password),
        phone_number=user.phone_number,
        role=user.role,
    )
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return db_user


def authenticate_user(db: Session, email: str, password: str):
    """
    Returns the user if the password matches, None otherwise.
    A missing account and a wrong password are indistinguishable to the caller.
    """
    db_user = get_user_by_email(db, email)
    if db_user is None or not auth.verify_password(password, db_user.password_hash):
        return None
    return db_user


# --- Properties and rooms ---

def get_property(db: Session, property_id: int):
    return db.query(models.Property).filter(models.Property.id == property_id).first()


def create_property(db: Session, property: schemas.PropertyCreate):
    db_property = models.Property(**property.model_dump())
    db.add(db_property)
    db.commit()
    db.refresh(db_property)
    return db_property


def create_room(db: Session, room: schemas.RoomCreate):
    db_room = models.Room(**room.model_dump())
    db.add(db_room)
    db.commit()
    db.refresh(db_room)
    return db_room


def update_room_status(db: Session, room_id: int, status: models.RoomStatus) -> bool:
    """
    Updates the status of a room.
    """
    db_room = db.query(models.Room).filter(models.Room.id == room_id).first()
    if db_room:
        db_room.status = status
        db.commit()
        return True
    return False


def search_rooms(
        db: Session,
        property_name: Optional[str] = None,
        room_type: Optional[str] = None,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
) -> List[Tuple[models.Room, str]]:
    """
    Returns (room, property name) pairs ordered by room id.
    Empty filters match everything; price bounds are inclusive.
    Name and type filters match literal text, so % and _ are not wildcards.
    """
    query = db.query(models.Room, models.Property.name).join(
        models.Property, models.Room.property_id == models.Property.id
    )
    if property_name:
        query = query.filter(models.Property.name.icontains(property_name, autoescape=True))
    if room_type:
        query = query.filter(models.Room.room_type.icontains(room_type, autoescape=True))
    if min_price is not None:
        query = query.filter(models.Room.price_per_night >= min_price)
    if max_price is not None:
        query = query.filter(models.Room.price_per_night <= max_price)
    return query.order_by(models.Room.id).all()


# --- Bookings ---

def _parse_date(value: str, field: str) -> datetime.date:
    value = value.strip()
    if not DATE_PATTERN.fullmatch(value):
        raise BookingValidationError(f"Invalid {field} format, expected YYYY-MM-DD")
    try:
        return datetime.datetime.strptime(value, DATE_FORMAT).date()
    except ValueError:
        raise BookingValidationError(f"Invalid {field} format, expected YYYY-MM-DD")


def validate_booking_request(booking: schemas.BookingCreate) -> Tuple[datetime.date, datetime.date]:
    """
    Checks everything that can be checked without touching the database.
    Returns the parsed (check_in, check_out) dates.
    """
    if booking.customer_id <= 0:
        raise BookingValidationError("Invalid customer ID")
    if not booking.booking_details:
        raise BookingValidationError("Booking details cannot be empty")
    if not booking.check_in_date or not booking.check_in_date.strip() \
            or not booking.check_out_date or not booking.check_out_date.strip():
        raise BookingValidationError("Check-in and check-out dates are required")
    if booking.payment_details.total_amount <= 0:
        raise BookingValidationError("Total amount must be greater than zero")
    for item in booking.booking_details:
        if item.quantity <= 0:
            raise BookingValidationError(f"Quantity for room {item.room_id} must be greater than zero")

    check_in = _parse_date(booking.check_in_date, "check_in_date")
    check_out = _parse_date(booking.check_out_date, "check_out_date")
    if check_out <= check_in:
        raise BookingValidationError("Check-out date must be after check-in date")
    return check_in, check_out


def count_nights(check_in: datetime.date, check_out: datetime.date) -> int:
    hours = (check_out - check_in).total_seconds() / 3600
    return int(hours // 24)


def get_room_price(db: Session, room_id: int) -> Optional[float]:
    return db.query(models.Room.price_per_night).filter(models.Room.id == room_id).scalar()


def create_booking(db: Session, booking: schemas.BookingCreate) -> Tuple[List[int], float]:
    """
    Atomically creates one booking row per line item and one payment row per booking.

    Each booking carries its own line price (quantity * nightly price * nights).
    Each payment carries the accumulated total of the whole request.

    The requirements disagree on the payment amount: the booking steps store the
    computed total, while a later note says the caller-declared total_amount is
    what gets persisted. The computed total is stored deliberately. The declared
    total is only checked to be positive and is never reconciled; a mismatch is
    logged as a warning.

    Any failure rolls the transaction back, leaving no rows behind.
    Room status is left untouched.
    """
    check_in, check_out = validate_booking_request(booking)
    nights = count_nights(check_in, check_out)

    booking_ids: List[int] = []
    total_price = 0.0
    try:
        # 1. One booking row per line item, in input order
        for item in booking.booking_details:
            price_per_night = get_room_price(db, item.room_id)
            if price_per_night is None:
                raise RoomNotFoundError(item.room_id)

            line_price = item.quantity * price_per_night * nights
            total_price += line_price

            db_booking = models.Booking(
                user_id=booking.customer_id,
                room_id=item.room_id,
                check_in_date=check_in,
                check_out_date=check_out,
                total_price=line_price,
            )
            db.add(db_booking)
            # Flush to get the generated id without committing
            db.flush()
            booking_ids.append(db_booking.id)

        # 2. One payment row per booking, each with the overall total
        paid_at = datetime.datetime.utcnow()
        for booking_id in booking_ids:
            db.add(models.Payment(
                booking_id=booking_id,
                payment_method=booking.payment_details.payment_method,
                payment_status=models.PAYMENT_STATUS_COMPLETED,
                payment_date=paid_at,
                amount=total_price,
            ))

        # 3. Commit everything at once
        db.commit()
    except Exception:
        db.rollback()
        raise

    declared = booking.payment_details.total_amount
    if declared != total_price:
        logger.warning(
            f"Declared total {declared} differs from computed total {total_price} "
            f"for bookings {booking_ids}"
        )
    return booking_ids, total_price
