"""Dependency injection for FastAPI endpoints"""

from fastapi import Header, Request
from recovery_gateway.infrastructure.clients.notifications import NotificationClient


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_tenant_id(x_tenant_id: str = Header(..., min_length=1, description="Tenant identifier")) -> str:
    """Tenant whose rules and debtors the request operates on"""
    return x_tenant_id


def get_notification_client() -> NotificationClient:
    """Provide notification webhook client instance"""
    return NotificationClient()
