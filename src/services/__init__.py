"""Application services, one module per record type."""

from src.services import (
    activity_log_service,
    budget_service,
    catalog_service,
    condo_service,
    dashboard_service,
    document_service,
    incident_service,
    message_service,
    notification_service,
    report_service,
    user_service,
    vendor_service,
)


__all__ = [
    "activity_log_service",
    "budget_service",
    "catalog_service",
    "condo_service",
    "dashboard_service",
    "document_service",
    "incident_service",
    "message_service",
    "notification_service",
    "report_service",
    "user_service",
    "vendor_service",
]
