from datetime import datetime
from sqlalchemy import Column, Integer, String, Date, Time, DateTime, Numeric, Text, ForeignKey
from sqlalchemy.orm import relationship
from barberdesk.database import Base


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True)
    barbershop_id = Column(
        Integer,
        ForeignKey("barbershops.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    professional_id = Column(
        Integer,
        ForeignKey("professionals.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    booking_date = Column(Date, nullable=False, index=True)
    booking_time = Column(Time, nullable=True)
    status = Column(String(20), nullable=False, default="pending", index=True)
    price = Column(Numeric(12, 2), nullable=True)
    total_price = Column(Numeric(12, 2), nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    # Relationships
    barbershop = relationship("Barbershop", back_populates="bookings")
    professional = relationship("Professional", back_populates="bookings")

    STATUSES = ["pending", "confirmed", "completed", "cancelled", "no_show"]

    def __repr__(self):
        return f"<Booking {self.id} {self.booking_date} ({self.status})>"
