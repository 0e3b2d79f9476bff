"""Data models for the Innovation Sandbox client.

Records mirror the service schema and are immutable pydantic models;
every field has a zero default so partial payloads and nulls still decode. Request
types are plain dataclasses that know how to render their own query
string or JSON body.
"""

from __future__ import annotations

import base64
import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class ReviewAction(str, Enum):
    """Lease review decisions."""
    APPROVE = "Approve"
    DENY = "Deny"


class LeaseStatus(str, Enum):
    """Lease statuses reported by the service."""
    ACTIVE = "Active"
    DENIED = "ApprovalDenied"
    MANUALLY_TERMINATED = "ManuallyTerminated"
    FROZEN = "Frozen"
    EXPIRED = "Expired"


class _Model(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        # JSON null decodes to the field's zero value
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class _Record(_Model):
    model_config = ConfigDict(alias_generator=to_camel)


# =============================================================================
# Records
# =============================================================================


class BudgetThreshold(_Record):
    dollars_spent: float = 0.0
    action: str = ""


class DurationThreshold(_Record):
    hours_remaining: float = 0.0
    action: str = ""


class MetaData(_Record):
    created_time: str = ""
    last_edit_time: str = ""
    schema_version: int | float | str | None = None


class Lease(_Record):
    """A time-boxed grant of an AWS account to a user."""

    user_email: str = ""
    uuid: str = ""
    status: str = ""
    original_lease_template_uuid: str = ""
    original_lease_template_name: str = ""
    lease_duration_in_hours: int = 0
    max_spend: float = 0.0
    budget_thresholds: list[BudgetThreshold] | None = None
    duration_thresholds: list[DurationThreshold] | None = None
    comments: str = ""
    aws_account_id: str = ""
    lease_id: str = ""
    start_date: str = ""
    expiration_date: str = ""
    end_date: str = ""
    total_cost_accrued: float = 0.0
    meta: MetaData = Field(default_factory=MetaData)


class LeaseTemplate(_Record):
    """Reusable lease configuration."""

    uuid: str = ""
    name: str = ""
    description: str = ""
    requires_approval: bool = False
    created_by: str = ""
    max_spend: float = 0.0
    budget_thresholds: list[BudgetThreshold] | None = None
    lease_duration_in_hours: int = 0
    duration_thresholds: list[DurationThreshold] | None = None
    meta: MetaData = Field(default_factory=MetaData)


class Account(_Record):
    aws_account_id: str = ""
    status: str = ""
    drift_at_last_scan: bool = False
    meta: MetaData = Field(default_factory=MetaData)


class UnregisteredAccount(_Model):
    """Organization account not yet registered with the sandbox."""

    id: str = Field("", alias="Id")
    arn: str = Field("", alias="Arn")
    email: str = Field("", alias="Email")
    name: str = Field("", alias="Name")
    status: str = Field("", alias="Status")
    joined_method: str = Field("", alias="JoinedMethod")
    joined_timestamp: str = Field("", alias="JoinedTimestamp")


class GlobalLeasesConfig(_Record):
    max_budget: float = 0.0
    default_budget_thresholds: list[int] | None = None
    default_duration_thresholds: list[int] | None = None
    max_budget_reclamation_threshold: int = 0
    max_duration_hours: float = 0.0
    max_leases_per_user: int = 0


class GlobalCleanupConfig(_Record):
    number_of_failed_attempts_to_cancel_cleanup: int = 0
    wait_before_retry_failed_attempt_seconds: int = 0
    number_of_successful_attempts_to_finish_cleanup: int = 0
    wait_before_rerun_successful_attempt_seconds: int = 0


class GlobalNotificationConfig(_Record):
    email_from: str = ""


class GlobalConfiguration(_Record):
    terms_of_service: str = ""
    maintenance_mode: bool = False
    leases: GlobalLeasesConfig = Field(default_factory=GlobalLeasesConfig)
    cleanup: GlobalCleanupConfig = Field(default_factory=GlobalCleanupConfig)
    auth: dict[str, Any] | None = None
    notification: GlobalNotificationConfig = Field(default_factory=GlobalNotificationConfig)


def derive_lease_id(user_email: str, uuid: str) -> str:
    """Build the client-side lease id: base64 of ``{"userEmail","uuid"}`` JSON."""
    raw = json.dumps(
        {"userEmail": user_email, "uuid": uuid},
        separators=(",", ":"),
        sort_keys=True,
    )
    return base64.b64encode(raw.encode("utf-8")).decode("ascii")


def with_derived_lease_id(lease: Lease) -> Lease:
    """Return a copy of a freshly created lease with its lease id set."""
    return lease.model_copy(update={"lease_id": derive_lease_id(lease.user_email, lease.uuid)})


# =============================================================================
# Page responses
# =============================================================================


class _Page(_Record):
    next_page_identifier: str | None = None

    @property
    def has_next_page(self) -> bool:
        return bool(self.next_page_identifier)


class GetLeasesResponse(_Page):
    leases: list[Lease] = Field(
        default_factory=list, validation_alias=AliasChoices("result", "items", "leases")
    )

    def filter_by_lease_template_name(self, name: str) -> list[Lease]:
        """Leases created from the template with this name."""
        return [lease for lease in self.leases if lease.original_lease_template_name == name]

    def filter_by_lease_template_uuid(self, uuid: str) -> list[Lease]:
        """Leases created from the template with this UUID."""
        return [lease for lease in self.leases if lease.original_lease_template_uuid == uuid]


class GetLeaseTemplatesResponse(_Page):
    lease_templates: list[LeaseTemplate] = Field(
        default_factory=list, validation_alias=AliasChoices("result", "items", "leaseTemplates")
    )


class GetAccountsResponse(_Page):
    accounts: list[Account] = Field(
        default_factory=list, validation_alias=AliasChoices("result", "items", "accounts")
    )


class GetUnregisteredAccountsResponse(_Page):
    unregistered_accounts: list[UnregisteredAccount] = Field(
        default_factory=list,
        validation_alias=AliasChoices("result", "items", "unregisteredAccounts"),
    )


# =============================================================================
# Requests
# =============================================================================


class QueryBuilder(Protocol):
    def build_query(self) -> dict[str, str]: ...


class PageIdentifiable(Protocol):
    def set_page_identifier(self, next_page: str) -> None: ...


def build_query(request: QueryBuilder | None) -> dict[str, str]:
    """Query parameters for a request; an absent request yields none."""
    if request is None:
        return {}
    return request.build_query()


def _non_empty(**params: Any) -> dict[str, str]:
    return {k: str(v) for k, v in params.items() if v not in (None, "")}


@dataclass
class _PageRequest:
    page_identifier: str | None = None
    page_size: int | None = None

    def set_page_identifier(self, next_page: str) -> None:
        self.page_identifier = next_page

    def build_query(self) -> dict[str, str]:
        # a zero page size means unset
        return _non_empty(pageIdentifier=self.page_identifier, pageSize=self.page_size or None)


@dataclass
class GetLeasesRequest(_PageRequest):
    user_email: str | None = None

    def build_query(self) -> dict[str, str]:
        query = super().build_query()
        query.update(_non_empty(userEmail=self.user_email))
        return query


@dataclass
class GetLeaseTemplatesRequest(_PageRequest):
    pass


@dataclass
class GetAccountsRequest(_PageRequest):
    pass


@dataclass
class GetUnregisteredAccountsRequest(_PageRequest):
    pass


@dataclass
class GetLeaseByIDRequest:
    lease_id: str = ""

    def build_query(self) -> dict[str, str]:
        return _non_empty(leaseId=self.lease_id)


@dataclass
class CreateLeaseRequest:
    lease_template_uuid: str = ""
    comments: str | None = None

    def build_query(self) -> dict[str, str]:
        return _non_empty(leaseTemplateUuid=self.lease_template_uuid, comments=self.comments)

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {"leaseTemplateUuid": self.lease_template_uuid}
        if self.comments:
            d["comments"] = self.comments
        return d


def _dump_thresholds(items: list[BudgetThreshold] | list[DurationThreshold]) -> list[dict[str, Any]]:
    return [item.model_dump(by_alias=True) for item in items]


@dataclass
class UpdateLeaseRequest:
    """Sparse lease update; only fields that are set are sent."""

    lease_id: str = ""
    max_spend: float | None = None
    budget_thresholds: list[BudgetThreshold] | None = None
    expiration_date: str | None = None
    duration_thresholds: list[DurationThreshold] | None = None

    def to_dict(self) -> dict[str, Any]:
        d: dict[str, Any] = {}
        if self.max_spend is not None:
            d["maxSpend"] = self.max_spend
        if self.budget_thresholds is not None:
            d["budgetThresholds"] = _dump_thresholds(self.budget_thresholds)
        if self.expiration_date is not None:
            d["expirationDate"] = self.expiration_date
        if self.duration_thresholds is not None:
            d["durationThresholds"] = _dump_thresholds(self.duration_thresholds)
        return d


@dataclass
class ReviewLeaseRequest:
    lease_id: str = ""
    action: ReviewAction | str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"action": ReviewAction(self.action).value}


@dataclass
class FreezeLeaseRequest:
    lease_id: str = ""


@dataclass
class TerminateLeaseRequest:
    lease_id: str = ""


@dataclass
class UpdateLeaseTemplateRequest:
    """Full lease template replacement."""

    lease_template_id: str = ""
    name: str = ""
    description: str = ""
    requires_approval: bool = False
    max_spend: float = 0.0
    lease_duration_in_hours: int = 0
    budget_thresholds: list[BudgetThreshold] | None = None
    duration_thresholds: list[DurationThreshold] | None = None
    created_by: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "requiresApproval": self.requires_approval,
            "maxSpend": self.max_spend,
            "leaseDurationInHours": self.lease_duration_in_hours,
            "budgetThresholds": (
                _dump_thresholds(self.budget_thresholds)
                if self.budget_thresholds is not None
                else None
            ),
            "durationThresholds": (
                _dump_thresholds(self.duration_thresholds)
                if self.duration_thresholds is not None
                else None
            ),
            "createdBy": self.created_by,
        }


@dataclass
class DeleteLeaseTemplateRequest:
    lease_template_id: str = ""


@dataclass
class RegisterAccountRequest:
    aws_account_id: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"awsAccountId": self.aws_account_id}


@dataclass
class RetryCleanupRequest:
    aws_account_id: str = ""


@dataclass
class EjectAccountRequest:
    aws_account_id: str = ""

