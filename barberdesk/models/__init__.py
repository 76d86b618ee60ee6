from barberdesk.models.barbershop import Barbershop
from barberdesk.models.professional import Professional
from barberdesk.models.booking import Booking
from barberdesk.models.commission_rate import ProfessionalCommission, CommissionRateHistory
from barberdesk.models.commission_payment import CommissionPayment
from barberdesk.models.commission_item import CommissionItem, CommissionPaymentLog

__all__ = [
    "Barbershop",
    "Professional",
    "Booking",
    "ProfessionalCommission",
    "CommissionRateHistory",
    "CommissionPayment",
    "CommissionItem",
    "CommissionPaymentLog",
]
