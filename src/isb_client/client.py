"""
Innovation Sandbox Client.

Async HTTP client for the Innovation Sandbox REST API: leases, lease
templates, accounts and global configuration.
"""

from __future__ import annotations

from datetime import timedelta
from typing import Any

import jwt

from isb_client.auth import generate_jwt, new_admin_user_claims, new_user_user_claims
from isb_client.core.config import ClientConfig, get_config
from isb_client.core.exceptions import APIRequestError, ParameterError
from isb_client.core.logging import get_logger
from isb_client.envelope import decode_data, encode_body
from isb_client.models import (
    Account,
    CreateLeaseRequest,
    DeleteLeaseTemplateRequest,
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
    LeaseTemplate,
    RegisterAccountRequest,
    RetryCleanupRequest,
    ReviewAction,
    ReviewLeaseRequest,
    TerminateLeaseRequest,
    UnregisteredAccount,
    UpdateLeaseRequest,
    UpdateLeaseTemplateRequest,
    build_query,
    with_derived_lease_id,
)
from isb_client.pagination import paginate_all
from isb_client.transport import Transport

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 15.0
IMPERSONATION_TOKEN_TTL = timedelta(minutes=15)


class SandboxClient:
    """
    Async client for the Innovation Sandbox REST API.

    Usage:
        async with SandboxClient("https://isb.example.com/api", token="...") as client:
            page = await client.get_leases(GetLeasesRequest(user_email="me@example.com"))

    Failed calls raise APIRequestError (nothing usable came back),
    JSONDecodingError (success body did not decode) or an APIResponseError
    subclass picked from the failure response.
    """

    def __init__(
        self,
        base_url: str,
        token: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = Transport(token=token, timeout=timeout)

    @classmethod
    def from_config(cls, config: ClientConfig | None = None) -> SandboxClient:
        """
        Build a client from configuration.

        A static token wins; otherwise, when a JWT secret and admin email
        are configured, an admin token is signed locally.
        """
        config = config or get_config()
        token = config.token.get_secret_value() if config.token else None
        if not token and config.can_sign_admin_token():
            token = generate_jwt(
                new_admin_user_claims(config.admin_email),
                config.jwt_secret.get_secret_value(),
                timedelta(minutes=config.admin_token_ttl_minutes),
            )
            logger.info("admin_token_generated", admin_email=config.admin_email)
        return cls(config.base_url, token=token, timeout=config.timeout_seconds)

    @property
    def base_url(self) -> str:
        return self._base_url

    async def __aenter__(self) -> SandboxClient:
        await self.connect()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def connect(self) -> None:
        """Create the HTTP client."""
        await self._transport.connect()
        logger.info("client_connected", base_url=self._base_url)

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._transport.close()

    def _url(self, *parts: str) -> str:
        return self._base_url + "/" + "/".join(parts)

    # ========================================================================
    # Leases
    # ========================================================================

    async def get_leases(self, request: GetLeasesRequest | None = None) -> GetLeasesResponse:
        """Fetch one page of leases."""
        response = await self._transport.get(self._url("leases"), params=build_query(request))
        return decode_data(response.content, GetLeasesResponse)

    async def fetch_all_leases(self, request: GetLeasesRequest | None = None) -> GetLeasesResponse:
        """Fetch every lease, following page identifiers until exhausted."""
        request = request or GetLeasesRequest()

        async def fetch_page(r: GetLeasesRequest) -> tuple[list[Lease], str | None]:
            page = await self.get_leases(r)
            return page.leases, page.next_page_identifier

        leases = await paginate_all(request, fetch_page)
        return GetLeasesResponse(leases=leases)

    async def get_lease_by_id(self, request: GetLeaseByIDRequest) -> Lease:
        """Fetch a single lease. The lease id is returned as the server sent it."""
        if request is None or not request.lease_id:
            raise ParameterError("lease_id is required")
        response = await self._transport.get(self._url("leases", request.lease_id))
        return decode_data(response.content, Lease)

    async def create_lease(self, request: CreateLeaseRequest) -> Lease:
        """Request a new lease from a template."""
        if request is None or not request.lease_template_uuid:
            raise ParameterError("lease_template_uuid is required")
        response = await self._transport.post(
            self._url("leases"), encode_body(request.to_dict())
        )
        return with_derived_lease_id(decode_data(response.content, Lease))

    async def create_lease_as_user(
        self,
        request: CreateLeaseRequest,
        user_email: str,
        jwt_secret: str,
    ) -> Lease:
        """
        Request a new lease on behalf of another user.

        The request is signed with a short-lived token for ``user_email``
        and sent through a separate transport, so the client's own token is
        never attached to it.
        """
        if request is None or not request.lease_template_uuid:
            raise ParameterError("lease_template_uuid is required")
        if not user_email:
            raise ParameterError("user_email is required")

        url = self._url("leases")
        body = encode_body(request.to_dict())
        try:
            token = generate_jwt(
                new_user_user_claims(user_email), jwt_secret, IMPERSONATION_TOKEN_TTL
            )
        except (jwt.PyJWTError, TypeError) as e:
            raise APIRequestError("jwt_gen", url, e) from e

        logger.info("impersonated_request", user_email=user_email, url=url)
        async with Transport(token=token, timeout=self._timeout) as transport:
            response = await transport.post(url, body)
        return with_derived_lease_id(decode_data(response.content, Lease))

    async def update_lease(self, request: UpdateLeaseRequest) -> Lease:
        """Patch a lease; only the fields set on the request are sent.

        Unlike lease creation, the returned lease id is the one the server sent.
        """
        if request is None or not request.lease_id:
            raise ParameterError("lease_id is required")
        response = await self._transport.patch(
            self._url("leases", request.lease_id), encode_body(request.to_dict())
        )
        return decode_data(response.content, Lease)

    async def review_lease(self, request: ReviewLeaseRequest) -> None:
        """Approve or deny a pending lease."""
        if (
            request is None
            or not request.lease_id
            or request.action not in (ReviewAction.APPROVE, ReviewAction.DENY)
        ):
            raise ParameterError("lease_id and action (Approve or Deny) are required")
        await self._transport.post(
            self._url("leases", request.lease_id, "review"), encode_body(request.to_dict())
        )

    async def freeze_lease(self, request: FreezeLeaseRequest) -> None:
        if request is None or not request.lease_id:
            raise ParameterError("lease_id is required")
        await self._transport.post(self._url("leases", request.lease_id, "freeze"))

    async def terminate_lease(self, request: TerminateLeaseRequest) -> None:
        if request is None or not request.lease_id:
            raise ParameterError("lease_id is required")
        await self._transport.post(self._url("leases", request.lease_id, "terminate"))

    # ========================================================================
    # Lease templates
    # ========================================================================

    async def get_lease_templates(
        self, request: GetLeaseTemplatesRequest | None = None
    ) -> GetLeaseTemplatesResponse:
        """Fetch one page of lease templates."""
        response = await self._transport.get(
            self._url("leaseTemplates"), params=build_query(request)
        )
        return decode_data(response.content, GetLeaseTemplatesResponse)

    async def fetch_all_lease_templates(
        self, request: GetLeaseTemplatesRequest | None = None
    ) -> GetLeaseTemplatesResponse:
        request = request or GetLeaseTemplatesRequest()

        async def fetch_page(r: GetLeaseTemplatesRequest) -> tuple[list[LeaseTemplate], str | None]:
            page = await self.get_lease_templates(r)
            return page.lease_templates, page.next_page_identifier

        templates = await paginate_all(request, fetch_page)
        return GetLeaseTemplatesResponse(lease_templates=templates)

    async def update_lease_template(self, request: UpdateLeaseTemplateRequest) -> LeaseTemplate:
        """Replace a lease template."""
        if request is None or not request.lease_template_id:
            raise ParameterError("lease_template_id is required")
        response = await self._transport.put(
            self._url("leaseTemplates", request.lease_template_id),
            encode_body(request.to_dict()),
        )
        return decode_data(response.content, LeaseTemplate)

    async def delete_lease_template(self, request: DeleteLeaseTemplateRequest) -> None:
        if request is None or not request.lease_template_id:
            raise ParameterError("lease_template_id is required")
        await self._transport.delete(self._url("leaseTemplates", request.lease_template_id))

    # ========================================================================
    # Accounts
    # ========================================================================

    async def get_accounts(self, request: GetAccountsRequest | None = None) -> GetAccountsResponse:
        """Fetch one page of registered accounts."""
        response = await self._transport.get(self._url("accounts"), params=build_query(request))
        return decode_data(response.content, GetAccountsResponse)

    async def fetch_all_accounts(
        self, request: GetAccountsRequest | None = None
    ) -> GetAccountsResponse:
        request = request or GetAccountsRequest()

        async def fetch_page(r: GetAccountsRequest) -> tuple[list[Account], str | None]:
            page = await self.get_accounts(r)
            return page.accounts, page.next_page_identifier

        accounts = await paginate_all(request, fetch_page)
        return GetAccountsResponse(accounts=accounts)

    async def get_unregistered_accounts(
        self, request: GetUnregisteredAccountsRequest | None = None
    ) -> GetUnregisteredAccountsResponse:
        """Fetch one page of organization accounts not yet registered."""
        response = await self._transport.get(
            self._url("accounts", "unregistered"), params=build_query(request)
        )
        return decode_data(response.content, GetUnregisteredAccountsResponse)

    async def fetch_all_unregistered_accounts(
        self, request: GetUnregisteredAccountsRequest | None = None
    ) -> GetUnregisteredAccountsResponse:
        request = request or GetUnregisteredAccountsRequest()

        async def fetch_page(r: GetUnregisteredAccountsRequest) -> tuple[list[UnregisteredAccount], str | None]:
            page = await self.get_unregistered_accounts(r)
            return page.unregistered_accounts, page.next_page_identifier

        accounts = await paginate_all(request, fetch_page)
        return GetUnregisteredAccountsResponse(unregistered_accounts=accounts)

    async def register_account(self, request: RegisterAccountRequest) -> Account:
        if request is None or not request.aws_account_id:
            raise ParameterError("aws_account_id is required")
        response = await self._transport.post(
            self._url("accounts"), encode_body(request.to_dict())
        )
        return decode_data(response.content, Account)

    async def retry_cleanup(self, request: RetryCleanupRequest) -> None:
        if request is None or not request.aws_account_id:
            raise ParameterError("aws_account_id is required")
        await self._transport.post(self._url("accounts", request.aws_account_id, "retryCleanup"))

    async def eject_account(self, request: EjectAccountRequest) -> None:
        if request is None or not request.aws_account_id:
            raise ParameterError("aws_account_id is required")
        await self._transport.post(self._url("accounts", request.aws_account_id, "eject"))

    # ========================================================================
    # Configuration
    # ========================================================================

    async def get_configurations(self) -> GlobalConfiguration:
        """Fetch the global configuration."""
        response = await self._transport.get(self._url("configurations"))
        return decode_data(response.content, GlobalConfiguration)
