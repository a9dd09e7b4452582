# backend/parkhub/core/exceptions.py
"""
Typed error hierarchy.

Services raise these on the first violated precondition; the handlers
registered in ``parkhub.main`` turn them into the
``{"success": false, "message": ..., "errors": [...]}`` envelope with the
status code carried by the exception class.
"""
from typing import List, Optional


class ParkHubError(Exception):
    """Base class for every error surfaced to API callers"""

    status_code: int = 500
    code: str = "internal_error"
    default_message: str = "Internal Server Error"

    def __init__(self, message: Optional[str] = None, errors: Optional[List[str]] = None):
        self.message = message or self.default_message
        self.errors = errors or []
        super().__init__(self.message)


# Base kinds

class ValidationError(ParkHubError):
    status_code = 400
    code = "validation_error"
    default_message = "Validation Error"


class AuthenticationError(ParkHubError):
    status_code = 401
    code = "authentication_required"
    default_message = "Authentication required"


class AuthorizationError(ParkHubError):
    status_code = 403
    code = "forbidden"
    default_message = "You do not have permission to perform this action"


class NotFoundError(ParkHubError):
    status_code = 404
    code = "not_found"
    default_message = "Resource not found"


class ConflictError(ParkHubError):
    status_code = 409
    code = "conflict"
    default_message = "Resource already exists"


class InternalError(ParkHubError):
    status_code = 500
    code = "internal_error"
    default_message = "Internal Server Error"


# Identity & access

class InvalidCredentials(AuthenticationError):
    code = "invalid_credentials"
    default_message = "Invalid credentials"


class InvalidToken(AuthenticationError):
    code = "invalid_token"
    default_message = "Invalid token"


class TokenExpired(AuthenticationError):
    code = "token_expired"
    default_message = "Token expired"


class AccountInactive(AuthorizationError):
    code = "account_inactive"
    default_message = "Account is inactive. Please contact administrator"


class TenantMismatch(AuthorizationError):
    code = "tenant_mismatch"
    default_message = "User does not belong to this tenant"


class PlanTooLow(AuthorizationError):
    code = "plan_too_low"


# Tenant resolution

class TenantIdentifierMissing(ValidationError):
    code = "tenant_identifier_missing"
    default_message = "Tenant identifier is required"


class TenantNotFound(NotFoundError):
    code = "tenant_not_found"
    default_message = "Tenant not found"


class TenantNotActive(AuthorizationError):
    code = "tenant_not_active"
    default_message = "Tenant account is not active"


class DuplicateDomain(ConflictError):
    code = "duplicate_domain"
    default_message = "Domain is already in use"


class TenantHasLiveData(ConflictError):
    code = "tenant_has_live_data"
    default_message = "Cannot delete a tenant that still owns sections or parked vehicles"


class DuplicateEmail(ConflictError):
    code = "duplicate_email"
    default_message = "User with this email already exists"


class UserNotFound(NotFoundError):
    code = "user_not_found"
    default_message = "User not found"


# Parking inventory

class SectionNotFound(NotFoundError):
    code = "section_not_found"
    default_message = "Parking section not found"


class DuplicateSection(ConflictError):
    code = "duplicate_section"
    default_message = "A section with this name already exists"


class CapacityBelowOccupancy(ValidationError):
    code = "capacity_below_occupancy"


class SectionHasOccupiedSlots(ConflictError):
    code = "section_has_occupied_slots"
    default_message = "Cannot delete section with occupied slots"


class SlotNotFound(NotFoundError):
    code = "slot_not_found"
    default_message = "Parking slot not found"


class DuplicateSlot(ConflictError):
    code = "duplicate_slot"
    default_message = "A slot with this name already exists in the section"


class SlotNotAvailable(ConflictError):
    code = "slot_not_available"
    default_message = "Parking slot is not available"


class SlotOccupied(ConflictError):
    code = "slot_occupied"
    default_message = "Cannot delete occupied slot"


class CannotOccupyWithoutVehicle(ValidationError):
    code = "cannot_occupy_without_vehicle"
    default_message = "Cannot mark slot as occupied without a vehicle"


# Vehicles, payments, reports, settings

class AlreadyParked(ConflictError):
    code = "already_parked"
    default_message = "Vehicle is already parked"


class VehicleNotFound(NotFoundError):
    code = "vehicle_not_found"
    default_message = "Vehicle not found"


class VehicleNotParked(NotFoundError):
    code = "vehicle_not_parked"
    default_message = "Parked vehicle not found with this plate number"


class PaymentNotFound(NotFoundError):
    code = "payment_not_found"
    default_message = "Payment not found"


class ReportNotFound(NotFoundError):
    code = "report_not_found"
    default_message = "Report not found"


class SettingsNotFound(NotFoundError):
    code = "settings_not_found"
    default_message = "Settings not found"
