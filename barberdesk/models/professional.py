from datetime import datetime
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Numeric, ForeignKey
from sqlalchemy.orm import relationship
from barberdesk.database import Base


class Professional(Base):
    __tablename__ = "professionals"

    id = Column(Integer, primary_key=True)
    barbershop_id = Column(
        Integer,
        ForeignKey("barbershops.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name = Column(String(255), nullable=False)
    photo_url = Column(String(500), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
    # Legacy rate field, mirrored from professional_commissions on every update
    commission_percentage = Column(Numeric(5, 2), nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    # Relationships
    barbershop = relationship("Barbershop", back_populates="professionals")
    bookings = relationship("Booking", back_populates="professional")
    commission = relationship(
        "ProfessionalCommission", back_populates="professional", uselist=False
    )

    def __repr__(self):
        return f"<Professional {self.name}>"
