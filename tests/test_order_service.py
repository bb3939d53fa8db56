"""Tests for order submission, the upsert merge and status updates."""

from datetime import datetime

import pytest
from sqlmodel import select

from consumer_integration.errors import NotFoundError, ValidationError
from consumer_integration.models.base import utcnow
from consumer_integration.models.order import Order
from consumer_integration.models.order_event import OrderEvent
from consumer_integration.services.order_service import (
    get_order_details,
    resolve_field,
    submit_order_details,
    update_order_status,
    upsert_order,
)


def events_for(session, order_id):
    statement = select(OrderEvent).where(OrderEvent.order_id == order_id).order_by(OrderEvent.id)
    return session.exec(statement).all()


class TestResolveField:
    def test_priority_order(self):
        assert resolve_field({"orderId": "B", "Id": "A"}, ["Id", "orderId"]) == "A"

    def test_blank_values_are_skipped(self):
        assert resolve_field({"Id": "  ", "id": "A"}, ["Id", "id"]) == "A"

    def test_numbers_are_stringified(self):
        assert resolve_field({"id": 42}, ["Id", "id"]) == "42"

    def test_nothing_found(self):
        assert resolve_field({"name": "x"}, ["Id", "id"]) is None


class TestSubmitOrderDetails:
    def test_new_order_gets_default_status(self, session):
        order = submit_order_details(session, {"Id": "A1", "items": []})

        assert order.status == "PLACED"
        assert order.payload == {"Id": "A1", "items": []}
        [event] = events_for(session, "A1")
        assert (event.event_type, event.new_status) == ("created", "PLACED")

    def test_new_order_with_initial_status(self, session):
        order = submit_order_details(session, {"orderId": "A2", "status": "CONFIRMED"})

        assert order.status == "CONFIRMED"

    def test_missing_id_is_rejected(self, session):
        with pytest.raises(ValidationError):
            submit_order_details(session, {"items": []})

        assert session.exec(select(OrderEvent)).all() == []

    def test_resubmission_replaces_payload_and_keeps_status(self, session):
        submit_order_details(session, {"Id": "A1", "total": 10})
        order = submit_order_details(session, {"Id": "A1", "total": 12})

        assert order.status == "PLACED"
        assert order.payload == {"Id": "A1", "total": 12}
        kinds = [e.event_type for e in events_for(session, "A1")]
        assert kinds == ["created", "order_details_sent"]

    def test_resubmission_does_not_revert_status_update(self, session):
        submit_order_details(session, {"Id": "A1"})
        update_order_status(session, "A1", "DISPATCHED")

        order = submit_order_details(session, {"Id": "A1", "status": "PLACED"})

        assert order.status == "DISPATCHED"

    def test_missing_status_is_filled_on_resubmission(self, session):
        session.add(Order(id="A1", payload={}, status=None))
        session.commit()

        order = submit_order_details(session, {"Id": "A1", "status": "CONFIRMED"})

        assert order.status == "CONFIRMED"


class TestUpsertOrder:
    def test_returns_whether_created(self, session):
        assert upsert_order(session, "A1", {"v": 1}) is True
        assert upsert_order(session, "A1", {"v": 2}) is False
        session.commit()

        assert session.get(Order, "A1").payload == {"v": 2}

    def test_refreshes_updated_at(self, session):
        stale = datetime(2020, 1, 1)
        session.add(Order(id="A1", payload={}, status="PLACED", created_at=stale, updated_at=stale))
        session.commit()

        upsert_order(session, "A1", {"v": 2})
        session.commit()

        order = session.get(Order, "A1")
        assert order.updated_at > stale
        assert order.created_at == stale


class TestGetOrderDetails:
    def test_unknown_order(self, session):
        with pytest.raises(NotFoundError) as exc_info:
            get_order_details(session, "NOPE")

        assert exc_info.value.to_body() == {"item": None, "statusCode": 404, "reasonPhrase": "Order not found"}
        assert events_for(session, "NOPE") == []

    def test_every_read_appends_an_event(self, session):
        submit_order_details(session, {"Id": "A1", "total": 10})

        assert get_order_details(session, "A1") == {"Id": "A1", "total": 10}
        get_order_details(session, "A1")

        kinds = [e.event_type for e in events_for(session, "A1")]
        assert kinds == ["created", "order_details_requested", "order_details_requested"]


class TestUpdateOrderStatus:
    @pytest.mark.parametrize("order_id, status", [(None, "DISPATCHED"), ("A1", None), ("", "")])
    def test_required_fields(self, session, order_id, status):
        with pytest.raises(ValidationError):
            update_order_status(session, order_id, status)

    def test_unknown_order(self, session):
        with pytest.raises(NotFoundError):
            update_order_status(session, "NOPE", "DISPATCHED")

    def test_status_is_overwritten_unconditionally(self, session):
        submit_order_details(session, {"Id": "A1"})
        update_order_status(session, "A1", "CONCLUDED")

        message = update_order_status(session, "A1", "CONFIRMED", "customer called back")

        assert session.get(Order, "A1").status == "CONFIRMED"
        assert message == "A1 changed to 'CONFIRMED': customer called back."
        last = events_for(session, "A1")[-1]
        assert (last.event_type, last.new_status) == ("status_updated", "CONFIRMED")

    def test_default_justification(self, session):
        submit_order_details(session, {"Id": "A1"})

        assert update_order_status(session, "A1", "DISPATCHED") == "A1 changed to 'DISPATCHED': Status updated."


class TestTimestamps:
    def test_timestamps_round_trip_through_storage(self, session):
        before = utcnow()
        submit_order_details(session, {"Id": "A1"})
        update_order_status(session, "A1", "CONFIRMED")
        session.expire_all()

        order = session.get(Order, "A1")
        assert before <= order.created_at <= order.updated_at <= utcnow()
        for event in events_for(session, "A1"):
            assert before <= event.created_at <= utcnow()
