"""Tenant-scoped entities: principals, settings and document counters."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from printpress.core.clock import utcnow


class UserRole(str, Enum):
    """Roles carried in access tokens."""

    ADMIN = "admin"
    USER = "user"


class Principal(BaseModel):
    """The authenticated caller of a request."""

    id: str
    email: str | None = None
    role: UserRole = UserRole.USER
    admin_id: str | None = None  # owning admin for non-admin users

    @property
    def tenant_id(self) -> str | None:
        """Tenant every record of this caller is scoped to.

        Admins own their tenant; users act on behalf of their admin.
        """
        if self.role == UserRole.ADMIN:
            return self.id
        return self.admin_id

    @property
    def actor(self) -> str:
        """Value recorded in created_by columns."""
        return self.email or self.id


class CounterName(str, Enum):
    """Sequence counters kept per tenant."""

    QUOTATION = "quotation"
    JOB = "job"
    ESTIMATE = "estimate"
    CHALLAN = "challan"


DEFAULT_PREFIXES: dict[CounterName, str] = {
    CounterName.QUOTATION: "Q",
    CounterName.JOB: "J",
    CounterName.ESTIMATE: "E",
    CounterName.CHALLAN: "C",
}


class TenantSettings(BaseModel):
    """Per-tenant configuration, loaded for each request that needs it."""

    admin_id: str
    company_name: str | None = None
    company_address: str | None = None
    company_phone: str | None = None
    company_email: str | None = None
    quotation_prefix: str | None = None
    job_prefix: str | None = None
    estimate_prefix: str | None = None
    challan_prefix: str | None = None
    updated_at: datetime = Field(default_factory=utcnow)

    def prefix_for(self, counter: CounterName) -> str:
        """Configured prefix for *counter*, or its default."""
        configured = {
            CounterName.QUOTATION: self.quotation_prefix,
            CounterName.JOB: self.job_prefix,
            CounterName.ESTIMATE: self.estimate_prefix,
            CounterName.CHALLAN: self.challan_prefix,
        }[counter]
        return configured or DEFAULT_PREFIXES[counter]


def format_sequence_number(prefix: str, value: int) -> str:
    """Render a document number such as ``J-007``."""
    return f"{prefix}-{value:03d}"
