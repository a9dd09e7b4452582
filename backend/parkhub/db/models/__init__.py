# backend/parkhub/db/models/__init__.py
from parkhub.db.models.tenant import Tenant
from parkhub.db.models.user import User
from parkhub.db.models.parking import ParkingSection, ParkingSlot
from parkhub.db.models.vehicle import Vehicle
from parkhub.db.models.payment import Payment
from parkhub.db.models.report import Report
from parkhub.db.models.setting import Setting

__all__ = [
    "Tenant", "User", "ParkingSection", "ParkingSlot",
    "Vehicle", "Payment", "Report", "Setting",
]
