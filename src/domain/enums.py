"""Domain enumerations: error codes, status categories and report periods."""

import enum


class ErrorCode(str, enum.Enum):
    VALIDATION_ERROR = "VALIDATION_ERROR"
    GOOGLE_MAPS_API_KEY_NOT_SET = "GOOGLE_MAPS_API_KEY_NOT_SET"
    GOOGLE_MAPS_API_ERROR = "GOOGLE_MAPS_API_ERROR"
    DISTANCE_CALCULATION_FAILED = "DISTANCE_CALCULATION_FAILED"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class StatusCategory(str, enum.Enum):
    DELIVERIES = "deliveries"
    DRIVERS = "drivers"
    PARTNERS = "partners"
    CLIENTS = "clients"


class ReportPeriod(str, enum.Enum):
    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    CUSTOM = "custom"
