# backend/parkhub/core/constants.py
from enum import Enum
from typing import Dict


class UserRole(str, Enum):
    SUPER_ADMIN = "SuperAdmin"
    ADMIN = "Admin"
    GATEKEEPER = "Gatekeeper"
    VIEWER = "Viewer"


class UserStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"


class TenantStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    SUSPENDED = "Suspended"
    TRIAL = "Trial"


# Statuses that may serve requests
OPERATIONAL_TENANT_STATUSES = (TenantStatus.ACTIVE, TenantStatus.TRIAL)


class PlanType(str, Enum):
    FREE = "Free"
    BASIC = "Basic"
    PREMIUM = "Premium"
    ENTERPRISE = "Enterprise"


PLAN_HIERARCHY: Dict[str, int] = {
    PlanType.FREE: 0,
    PlanType.BASIC: 1,
    PlanType.PREMIUM: 2,
    PlanType.ENTERPRISE: 3,
}


class SectionStatus(str, Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    MAINTENANCE = "Maintenance"


class SlotStatus(str, Enum):
    AVAILABLE = "Available"
    OCCUPIED = "Occupied"
    MAINTENANCE = "Maintenance"


class SlotType(str, Enum):
    STANDARD = "Standard"
    COMPACT = "Compact"
    HANDICAP = "Handicap"
    ELECTRIC = "Electric"
    MOTORCYCLE = "Motorcycle"


class VehicleStatus(str, Enum):
    PARKED = "Parked"
    EXITED = "Exited"
    RESERVED = "Reserved"


class VehicleType(str, Enum):
    SEDAN = "Sedan"
    SUV = "SUV"
    HATCHBACK = "Hatchback"
    TRUCK = "Truck"
    MOTORCYCLE = "Motorcycle"
    OTHER = "Other"


class PaymentMethod(str, Enum):
    CREDIT_CARD = "Credit Card"
    CASH = "Cash"
    MOBILE_PAYMENT = "Mobile Payment"
    SUBSCRIPTION = "Subscription"
    INVOICE = "Invoice"


class PaymentStatus(str, Enum):
    COMPLETED = "Completed"
    PENDING = "Pending"
    FAILED = "Failed"


class ReportType(str, Enum):
    DAILY = "Daily"
    WEEKLY = "Weekly"
    MONTHLY = "Monthly"
    CUSTOM = "Custom"
    OCCUPANCY = "Occupancy"
    REVENUE = "Revenue"
    ACTIVITY = "Activity"


class ReportFormat(str, Enum):
    PDF = "PDF"
    CSV = "CSV"
    EXCEL = "Excel"
    JSON = "JSON"


class ReportFrequency(str, Enum):
    DAILY = "Daily"
    WEEKLY = "Weekly"
    MONTHLY = "Monthly"


DEFAULT_VEHICLE_TYPE = VehicleType.SEDAN
DEFAULT_SLOT_TYPE = SlotType.STANDARD
