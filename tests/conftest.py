# Configure the service before any application module reads its settings
import os

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("ALGORITHM", "HS256")
os.environ.setdefault("DATABASE_URL", "sqlite://")

# Imports for testing tools
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Import your application code
from hotel_booking.main import app
from hotel_booking.database import Base, get_db
from hotel_booking import auth, models

# --- Test Database Setup ---
# One in-memory database shared by the test session and the request threads
engine = create_engine(
    "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

TEST_PASSWORD = "s3cret-pass"


# --- Database Management Fixtures ---
@pytest.fixture(scope="function")
def db_session():
    """Provides a clean database for each test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    yield session
    session.close()
    Base.metadata.drop_all(bind=engine)


# --- API Test Client Fixture ---
@pytest.fixture(scope="function")
def client(db_session):
    """Provides a TestClient wired to the test database."""
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as c:
        yield c

    # Clean up overrides
    app.dependency_overrides.clear()


@pytest.fixture
def token_settings() -> auth.TokenSettings:
    return app.state.token_settings


# --- Data helpers ---
@pytest.fixture
def make_user(db_session):
    """Inserts a user directly and returns it."""
    def _make_user(role: models.UserRole, email: str = None):
        user = models.User(
            name=f"{role.value.title()} User",
            email=email or f"{role.value}@example.com",
            password_hash=auth.hash_password(TEST_PASSWORD),
            phone_number="+620000000",
            role=role,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user
    return _make_user


@pytest.fixture
def headers_for(make_user, token_settings):
    """Creates a user with the given role and returns bearer headers for it."""
    def _headers_for(role: models.UserRole):
        user = make_user(role)
        token = auth.create_access_token(user.email, token_settings)
        return {"Authorization": f"Bearer {token}"}
    return _headers_for


@pytest.fixture
def staff_headers(headers_for):
    return headers_for(models.UserRole.STAFF)


@pytest.fixture
def customer_headers(headers_for):
    return headers_for(models.UserRole.CUSTOMER)


@pytest.fixture
def make_room(db_session):
    """Inserts a room (and its property if needed) and returns the room."""
    def _make_room(price: float, room_type: str = "Deluxe", property_name: str = "Seaside Hotel",
                   room_name: str = "101", property: models.Property = None):
        if property is None:
            property = models.Property(name=property_name, address="1 Beach Rd",
                                       description="By the sea", contact_number="+62111")
            db_session.add(property)
            db_session.commit()
        room = models.Room(property_id=property.id, room_name=room_name, room_type=room_type,
                           price_per_night=price, status=models.RoomStatus.AVAILABLE)
        db_session.add(room)
        db_session.commit()
        db_session.refresh(room)
        return room
    return _make_room
