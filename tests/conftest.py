from datetime import date
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from barberdesk.database import get_db, init_db
from barberdesk.models import Barbershop, Booking, Professional, ProfessionalCommission


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    Session = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = Session()
    yield session
    session.close()


@pytest.fixture
def client(db):
    from barberdesk.main import app

    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def shop(db):
    barbershop = Barbershop(name="Navalha de Ouro", slug="navalha")
    db.add(barbershop)
    db.commit()
    return barbershop


@pytest.fixture
def other_shop(db):
    barbershop = Barbershop(name="Corte Fino", slug="corte-fino")
    db.add(barbershop)
    db.commit()
    return barbershop


@pytest.fixture
def ana(db, shop):
    """Professional with a 40% rate."""
    pro = Professional(barbershop_id=shop.id, name="Ana Souza")
    db.add(pro)
    db.flush()
    db.add(ProfessionalCommission(
        barbershop_id=shop.id, professional_id=pro.id, commission_rate=Decimal("40")
    ))
    db.commit()
    return pro


@pytest.fixture
def bruno(db, shop):
    """Professional without a stored rate."""
    pro = Professional(barbershop_id=shop.id, name="Bruno Lima")
    db.add(pro)
    db.commit()
    return pro


@pytest.fixture
def make_booking(db):
    def _make(shop, pro, day, status="completed", total_price=None, price=None):
        booking = Booking(
            barbershop_id=shop.id,
            professional_id=pro.id if pro is not None else None,
            booking_date=day,
            status=status,
            total_price=Decimal(str(total_price)) if total_price is not None else None,
            price=Decimal(str(price)) if price is not None else None,
        )
        db.add(booking)
        db.commit()
        return booking
    return _make


@pytest.fixture
def january_bookings(shop, ana, bruno, make_booking):
    """Bookings from the worked example: A 40%, B default 50%."""
    make_booking(shop, ana, date(2024, 1, 5), total_price=100)
    make_booking(shop, ana, date(2024, 1, 10), total_price=50)
    make_booking(shop, bruno, date(2024, 1, 7), total_price=80)
    make_booking(shop, ana, date(2024, 1, 8), status="cancelled", total_price=999)
    make_booking(shop, bruno, date(2023, 12, 31), total_price=80)
