from sqlalchemy import Column, Integer, String, Float, Text, Date, ForeignKey, TIMESTAMP
from sqlalchemy.orm import relationship
from enum import Enum as PyEnum
from sqlalchemy import Enum as SQLEnum
import datetime

from .database import Base


# --- ENUM for User Roles ---
class UserRole(PyEnum):
    ADMIN = "admin"
    STAFF = "staff"
    CUSTOMER = "customer"


# --- ENUM for Room Status ---
class RoomStatus(PyEnum):
    AVAILABLE = "available"
    BOOKED = "booked"
    UNDER_MAINTENANCE = "under_maintenance"


PAYMENT_STATUS_COMPLETED = "completed"


# --- User Model ---
class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    phone_number = Column(String(30), nullable=True)
    role = Column(SQLEnum(UserRole), default=UserRole.CUSTOMER, nullable=False)

    bookings = relationship("Booking", back_populates="user")


# --- Property Model ---
class Property(Base):
    __tablename__ = "properties"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), index=True, nullable=False)
    address = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    contact_number = Column(String(30), nullable=True)

    rooms = relationship("Room", back_populates="property")


# --- Room Model ---
class Room(Base):
    __tablename__ = "rooms"

    id = Column(Integer, primary_key=True, index=True)
    property_id = Column(Integer, ForeignKey("properties.id"), index=True, nullable=False)
    room_name = Column(String(100), nullable=False)
    room_type = Column(String(100), index=True, nullable=False)
    price_per_night = Column(Float, nullable=False)
    status = Column(SQLEnum(RoomStatus), default=RoomStatus.AVAILABLE, nullable=False)

    property = relationship("Property", back_populates="rooms")


# --- Booking Model (one row per line item) ---
class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), index=True, nullable=False)
    room_id = Column(Integer, ForeignKey("rooms.id"), index=True, nullable=False)

    check_in_date = Column(Date, nullable=False)
    check_out_date = Column(Date, nullable=False)
    total_price = Column(Float, nullable=False)

    created_at = Column(TIMESTAMP, default=datetime.datetime.utcnow)

    user = relationship("User", back_populates="bookings")
    payments = relationship("Payment", back_populates="booking")


# --- Payment Model (one row per booking row) ---
class Payment(Base):
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, index=True)
    booking_id = Column(Integer, ForeignKey("bookings.id"), index=True, nullable=False)
    payment_method = Column(String(50), nullable=False)
    payment_status = Column(String(20), default=PAYMENT_STATUS_COMPLETED, nullable=False)
    payment_date = Column(TIMESTAMP, default=datetime.datetime.utcnow, nullable=False)
    amount = Column(Float, nullable=False)

    booking = relationship("Booking", back_populates="payments")
