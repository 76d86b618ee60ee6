from datetime import datetime
from sqlalchemy import Column, Integer, String, Date, DateTime, Numeric, Text, ForeignKey
from sqlalchemy.orm import relationship
from barberdesk.database import Base


class CommissionPayment(Base):
    """Payout ledger entry. Entered by an admin, not derived from live aggregates."""

    __tablename__ = "commission_payments"

    id = Column(Integer, primary_key=True)
    barbershop_id = Column(
        Integer,
        ForeignKey("barbershops.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    professional_id = Column(
        Integer,
        ForeignKey("professionals.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    period_start = Column(Date, nullable=False)
    period_end = Column(Date, nullable=False)
    gross_amount = Column(Numeric(12, 2), nullable=False, default=0)
    commission_rate = Column(Numeric(5, 2), nullable=False)
    commission_amount = Column(Numeric(12, 2), nullable=False, default=0)
    status = Column(String(20), nullable=False, default="pending", index=True)  # pending | paid
    paid_at = Column(DateTime, nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(
        DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow
    )

    professional = relationship("Professional")

    STATUSES = ["pending", "paid"]

    @property
    def is_paid(self):
        return self.status == "paid"

    def mark_paid(self, paid_at: datetime = None):
        """Mark payout as paid."""
        self.status = "paid"
        self.paid_at = paid_at or datetime.utcnow()
        self.updated_at = datetime.utcnow()
        return self

    def mark_pending(self):
        """Move a payout back to pending."""
        self.status = "pending"
        self.paid_at = None
        self.updated_at = datetime.utcnow()
        return self

    def __repr__(self):
        return (
            f"<CommissionPayment pro={self.professional_id} "
            f"{self.period_start}..{self.period_end} ({self.status})>"
        )
