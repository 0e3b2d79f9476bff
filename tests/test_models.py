"""Tests for records, request rendering and lease ids."""

import base64
import json
from urllib.parse import parse_qs, urlencode

import pytest
from pydantic import ValidationError

from isb_client.models import (
    BudgetThreshold,
    CreateLeaseRequest,
    DurationThreshold,
    GetAccountsRequest,
    GetLeaseByIDRequest,
    GetLeasesRequest,
    GetLeasesResponse,
    GetLeaseTemplatesResponse,
    GetUnregisteredAccountsResponse,
    Lease,
    MetaData,
    RegisterAccountRequest,
    ReviewAction,
    ReviewLeaseRequest,
    UnregisteredAccount,
    UpdateLeaseRequest,
    UpdateLeaseTemplateRequest,
    build_query,
    derive_lease_id,
    with_derived_lease_id,
)

from tests.conftest import lease_payload


class TestLeaseID:
    def test_encodes_sorted_compact_json(self):
        lease_id = derive_lease_id("user@example.com", "lease123")
        assert base64.b64decode(lease_id) == b'{"userEmail":"user@example.com","uuid":"lease123"}'

    def test_is_standard_padded_base64(self):
        lease_id = derive_lease_id("a@b.c", "x")
        assert len(lease_id) % 4 == 0
        assert json.loads(base64.b64decode(lease_id)) == {"userEmail": "a@b.c", "uuid": "x"}

    def test_with_derived_lease_id_copies(self):
        lease = Lease.model_validate(lease_payload(leaseId="server-side"))
        derived = with_derived_lease_id(lease)
        assert derived.lease_id == derive_lease_id("user@example.com", "lease123")
        assert lease.lease_id == "server-side"


class TestRecords:
    def test_camel_case_aliases(self):
        lease = Lease.model_validate(
            lease_payload(
                budgetThresholds=[{"dollarsSpent": 10, "action": "ALERT"}],
                meta={"createdTime": "2024-01-01T00:00:00Z", "schemaVersion": 1},
            )
        )
        assert lease.original_lease_template_uuid == "tpl"
        assert lease.budget_thresholds == [BudgetThreshold(dollars_spent=10, action="ALERT")]
        assert lease.meta.created_time == "2024-01-01T00:00:00Z"

    def test_records_are_frozen(self):
        lease = Lease.model_validate(lease_payload())
        with pytest.raises(ValidationError):
            lease.uuid = "other"

    def test_nulls_decode_to_zero_values(self):
        lease = Lease.model_validate(
            lease_payload(
                endDate=None,
                awsAccountId=None,
                comments=None,
                maxSpend=None,
                budgetThresholds=None,
                meta=None,
            )
        )
        assert lease.end_date == ""
        assert lease.aws_account_id == ""
        assert lease.comments == ""
        assert lease.max_spend == 0.0
        assert lease.budget_thresholds is None
        assert lease.meta == MetaData()

    def test_unregistered_account_nulls(self):
        account = UnregisteredAccount.model_validate({"Id": "111122223333", "Arn": None, "Email": None})
        assert account.id == "111122223333"
        assert account.arn == ""
        assert account.email == ""

    def test_null_page_items(self):
        page = GetLeasesResponse.model_validate({"result": None, "nextPageIdentifier": None})
        assert page.leases == []

    def test_unknown_fields_ignored(self):
        lease = Lease.model_validate(lease_payload(somethingNew=True))
        assert lease.uuid == "lease123"


class TestPageResponses:
    @pytest.mark.parametrize("key", ["result", "items", "leases"])
    def test_leases_item_keys(self, key):
        page = GetLeasesResponse.model_validate({key: [lease_payload()], "nextPageIdentifier": "p2"})
        assert len(page.leases) == 1
        assert page.next_page_identifier == "p2"
        assert page.has_next_page

    def test_last_page(self):
        page = GetLeasesResponse.model_validate({"result": [], "nextPageIdentifier": None})
        assert page.leases == []
        assert not page.has_next_page

    def test_templates_and_unregistered_accounts(self):
        templates = GetLeaseTemplatesResponse.model_validate({"result": [{"uuid": "t1", "requiresApproval": True}]})
        assert templates.lease_templates[0].requires_approval is True

        unregistered = GetUnregisteredAccountsResponse.model_validate(
            {"result": [{"Id": "111122223333", "Email": "a@b.c", "JoinedMethod": "CREATED"}]}
        )
        account = unregistered.unregistered_accounts[0]
        assert account.id == "111122223333"
        assert account.joined_method == "CREATED"

    def test_filters(self):
        page = GetLeasesResponse(
            leases=[
                Lease(uuid="1", original_lease_template_name="a", original_lease_template_uuid="ua"),
                Lease(uuid="2", original_lease_template_name="b", original_lease_template_uuid="ub"),
                Lease(uuid="3", original_lease_template_name="a", original_lease_template_uuid="ua"),
            ]
        )
        assert [l.uuid for l in page.filter_by_lease_template_name("a")] == ["1", "3"]
        assert [l.uuid for l in page.filter_by_lease_template_uuid("ub")] == ["2"]
        assert page.filter_by_lease_template_name("missing") == []


class TestQueries:
    def test_none_request_has_no_query(self):
        assert build_query(None) == {}

    def test_empty_fields_omitted(self):
        assert GetLeasesRequest().build_query() == {}
        assert GetAccountsRequest(page_identifier="").build_query() == {}
        assert GetAccountsRequest(page_size=0).build_query() == {}

    def test_leases_query_round_trips(self):
        request = GetLeasesRequest(user_email="a+b@example.com", page_identifier="tok/==", page_size=25)
        parsed = parse_qs(urlencode(request.build_query()))
        assert parsed == {
            "userEmail": ["a+b@example.com"],
            "pageIdentifier": ["tok/=="],
            "pageSize": ["25"],
        }

    def test_set_page_identifier(self):
        request = GetAccountsRequest(page_size=10)
        request.set_page_identifier("next")
        assert request.build_query() == {"pageIdentifier": "next", "pageSize": "10"}

    def test_other_queries(self):
        assert GetLeaseByIDRequest(lease_id="abc").build_query() == {"leaseId": "abc"}
        assert CreateLeaseRequest(lease_template_uuid="t", comments="c").build_query() == {
            "leaseTemplateUuid": "t",
            "comments": "c",
        }


class TestBodies:
    def test_create_lease_omits_empty_comments(self):
        assert CreateLeaseRequest(lease_template_uuid="t").to_dict() == {"leaseTemplateUuid": "t"}

    def test_update_lease_is_sparse(self):
        assert UpdateLeaseRequest(lease_id="x").to_dict() == {}
        body = UpdateLeaseRequest(
            lease_id="x",
            max_spend=100,
            duration_thresholds=[DurationThreshold(hours_remaining=2, action="FREEZE")],
        ).to_dict()
        assert body == {
            "maxSpend": 100,
            "durationThresholds": [{"hoursRemaining": 2.0, "action": "FREEZE"}],
        }

    def test_review_action_accepts_string(self):
        assert ReviewLeaseRequest(lease_id="x", action="Deny").to_dict() == {"action": "Deny"}
        assert ReviewLeaseRequest(lease_id="x", action=ReviewAction.APPROVE).to_dict() == {"action": "Approve"}

    def test_update_template_sends_every_field(self):
        body = UpdateLeaseTemplateRequest(lease_template_id="t", name="n").to_dict()
        assert set(body) == {
            "name",
            "description",
            "requiresApproval",
            "maxSpend",
            "leaseDurationInHours",
            "budgetThresholds",
            "durationThresholds",
            "createdBy",
        }
        assert "leaseTemplateId" not in body

    def test_register_account(self):
        assert RegisterAccountRequest(aws_account_id="123").to_dict() == {"awsAccountId": "123"}
