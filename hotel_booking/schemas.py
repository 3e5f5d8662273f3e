from pydantic import BaseModel, Field, field_validator
from typing import List, Optional

from .models import UserRole, RoomStatus

BCRYPT_MAX_PASSWORD_BYTES = 72


class MessageResponse(BaseModel):
    message: str


# --- Accounts ---

class UserCreate(BaseModel):
    name: str = Field(..., min_length=1)
    email: str = Field(..., min_length=3)
    password: str = Field(..., min_length=1)
    phone_number: Optional[str] = None
    role: UserRole

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        # bcrypt only uses the first 72 bytes and refuses longer input
        if len(value.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
            raise ValueError(f"password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes")
        return value


class LoginRequest(BaseModel):
    email: str
    password: str


class LoginResponse(MessageResponse):
    token: str


# --- Catalog ---

class PropertyCreate(BaseModel):
    name: str = Field(..., min_length=1)
    address: str
    description: Optional[str] = None
    contact_number: Optional[str] = None


class RoomCreate(BaseModel):
    property_id: int
    room_name: str = Field(..., min_length=1)
    room_type: str = Field(..., min_length=1)
    price_per_night: float = Field(..., ge=0)
    status: RoomStatus = RoomStatus.AVAILABLE


class CreatedResponse(MessageResponse):
    id: int


class RoomStatusUpdate(BaseModel):
    room_id: int
    status: RoomStatus


class RoomSearch(BaseModel):
    property_name: Optional[str] = None
    room_type: Optional[str] = None
    min_price: Optional[float] = None
    max_price: Optional[float] = None


class RoomRead(BaseModel):
    id: int
    property_id: int
    property_name: str
    room_name: str
    room_type: str
    price_per_night: float
    status: RoomStatus


# --- Bookings ---

class BookingLineItem(BaseModel):
    room_id: int
    quantity: int


class PaymentDetails(BaseModel):
    payment_method: str = Field(..., min_length=1)
    total_amount: float


class BookingCreate(BaseModel):
    customer_id: int
    # Kept as text; the booking transaction parses and validates them
    check_in_date: Optional[str] = None
    check_out_date: Optional[str] = None
    booking_details: List[BookingLineItem] = []
    payment_details: PaymentDetails


class BookingResult(BaseModel):
    message: str = "Booking successful"
    booking_ids: List[int]
    total_price: float
