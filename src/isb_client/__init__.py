"""
ISB Client: Python client for the Innovation Sandbox REST API.

Usage:
    from isb_client import SandboxClient, CreateLeaseRequest

    async with SandboxClient("https://isb.example.com/api", token="...") as client:
        lease = await client.create_lease(
            CreateLeaseRequest(lease_template_uuid="tpl-uuid", comments="demo"),
        )
        print(lease.lease_id, lease.status)
"""

__version__ = "1.0.0"

from isb_client.client import SandboxClient
from isb_client.auth import (
    Role,
    UserClaims,
    generate_jwt,
    new_admin_user_claims,
    new_user_user_claims,
)
from isb_client.core.config import ClientConfig, get_config
from isb_client.core.exceptions import (
    ISBError,
    ErrorKind,
    ResourceType,
    APIRequestError,
    ParameterError,
    NonJSONResponseError,
    JSONDecodingError,
    APIResponseError,
    BadRequestError,
    UnauthorizedError,
    NotFoundError,
    LeaseNotFoundError,
    LeaseTemplateNotFoundError,
    AccountNotFoundError,
    ConflictError,
    LeaseConflictError,
    LeaseTemplateConflictError,
    AccountConflictError,
    ServerError,
    FailResponseError,
)
from isb_client.envelope import FailErrorDetail
from isb_client.models import (
    Account,
    BudgetThreshold,
    CreateLeaseRequest,
    DeleteLeaseTemplateRequest,
    DurationThreshold,
    EjectAccountRequest,
    FreezeLeaseRequest,
    GetAccountsRequest,
    GetAccountsResponse,
    GetLeaseByIDRequest,
    GetLeasesRequest,
    GetLeasesResponse,
    GetLeaseTemplatesRequest,
    GetLeaseTemplatesResponse,
    GetUnregisteredAccountsRequest,
    GetUnregisteredAccountsResponse,
    GlobalConfiguration,
    Lease,
    LeaseStatus,
    LeaseTemplate,
    RegisterAccountRequest,
    RetryCleanupRequest,
    ReviewAction,
    ReviewLeaseRequest,
    TerminateLeaseRequest,
    UnregisteredAccount,
    UpdateLeaseRequest,
    UpdateLeaseTemplateRequest,
    derive_lease_id,
)
from isb_client.pagination import paginate_all

__all__ = [
    "__version__",
    "SandboxClient",
    "ClientConfig",
    "get_config",
    # auth
    "Role",
    "UserClaims",
    "generate_jwt",
    "new_admin_user_claims",
    "new_user_user_claims",
    # errors
    "ISBError",
    "ErrorKind",
    "ResourceType",
    "APIRequestError",
    "ParameterError",
    "NonJSONResponseError",
    "JSONDecodingError",
    "APIResponseError",
    "BadRequestError",
    "UnauthorizedError",
    "NotFoundError",
    "LeaseNotFoundError",
    "LeaseTemplateNotFoundError",
    "AccountNotFoundError",
    "ConflictError",
    "LeaseConflictError",
    "LeaseTemplateConflictError",
    "AccountConflictError",
    "ServerError",
    "FailResponseError",
    "FailErrorDetail",
    # models
    "Account",
    "BudgetThreshold",
    "CreateLeaseRequest",
    "DeleteLeaseTemplateRequest",
    "DurationThreshold",
    "EjectAccountRequest",
    "FreezeLeaseRequest",
    "GetAccountsRequest",
    "GetAccountsResponse",
    "GetLeaseByIDRequest",
    "GetLeasesRequest",
    "GetLeasesResponse",
    "GetLeaseTemplatesRequest",
    "GetLeaseTemplatesResponse",
    "GetUnregisteredAccountsRequest",
    "GetUnregisteredAccountsResponse",
    "GlobalConfiguration",
    "Lease",
    "LeaseStatus",
    "LeaseTemplate",
    "RegisterAccountRequest",
    "RetryCleanupRequest",
    "ReviewAction",
    "ReviewLeaseRequest",
    "TerminateLeaseRequest",
    "UnregisteredAccount",
    "UpdateLeaseRequest",
    "UpdateLeaseTemplateRequest",
    "derive_lease_id",
    "paginate_all",
]
