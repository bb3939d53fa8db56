"""Tests for the partner status-code translation."""

import pytest

from consumer_integration.constants.order_status import OrderEventKind
from consumer_integration.services.event_codes import PartnerCode, translate_event


class TestKindRules:
    def test_created_is_placed(self):
        assert translate_event("created") == PartnerCode("PLACED", "PLC")

    def test_created_is_case_insensitive(self):
        assert translate_event("CREATED", "PLACED") == PartnerCode("PLACED", "PLC")

    def test_order_details_requested(self):
        assert translate_event("ORDER_DETAILS_REQUESTED") == PartnerCode("ORDER_DETAILS_REQUESTED", "ODR")

    def test_kind_rule_wins_over_status_rule(self):
        assert translate_event("created", "cancelado") == PartnerCode("PLACED", "PLC")

    def test_details_requested_wins_over_status_rule(self):
        assert translate_event("order_details_requested", "dispatched").full_code == "ORDER_DETAILS_REQUESTED"


class TestStatusRules:
    @pytest.mark.parametrize(
        "status, expected",
        [
            ("confirmed", PartnerCode("CONFIRMED", "CFM")),
            ("CONFIRMADO", PartnerCode("CONFIRMED", "CFM")),
            ("cancelled", PartnerCode("CANCELLED", "CAN")),
            ("Cancelado", PartnerCode("CANCELLED", "CAN")),
            ("DISPATCHED", PartnerCode("DISPATCHED", "DSP")),
            ("ready_to_pickup", PartnerCode("READY_TO_PICKUP", "RTP")),
            ("concluded", PartnerCode("CONCLUDED", "CON")),
        ],
    )
    def test_status_updated_event(self, status, expected):
        assert translate_event("status_updated", status) == expected

    def test_status_rules_apply_to_any_kind(self):
        assert translate_event("some_future_kind", "confirmed") == PartnerCode("CONFIRMED", "CFM")


class TestFallback:
    def test_unrecognised_status_falls_back_to_kind(self):
        assert translate_event("status_updated", "preparing") == PartnerCode("STATUS_UPDATED", "UNK")

    def test_details_sent_is_not_mapped(self):
        assert translate_event("order_details_sent", "PLACED") == PartnerCode("ORDER_DETAILS_SENT", "UNK")

    def test_free_form_kind_is_upper_cased(self):
        assert translate_event("Driver_Assigned") == PartnerCode("DRIVER_ASSIGNED", "UNK")


class TestOrderEventKind:
    def test_lookup_is_case_insensitive(self):
        assert OrderEventKind("Status_Updated") is OrderEventKind.STATUS_UPDATED

    def test_unknown_kind_maps_to_unknown_member(self):
        assert OrderEventKind("driver_assigned") is OrderEventKind.UNKNOWN
