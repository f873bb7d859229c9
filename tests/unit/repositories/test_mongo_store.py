"""
Tests for the MongoRecordStore implementation, run against mongomock.
"""
import mongomock
import pytest

from iot_ticketing.adapters.mongodb_adapter import MongoDBAdapter
from iot_ticketing.domains import (
    DuplicateIdError,
    Notification,
    NotFoundError,
    Role,
    Ticket,
    TicketStatus,
)
from iot_ticketing.repositories.mongo_store import MongoRecordStore


@pytest.fixture
def mongodb_adapter():
    client = mongomock.MongoClient()
    adapter = MongoDBAdapter(connection_string=client.HOST, database_name="test_db")
    # Replace the real client with the mock
    adapter.client = client
    adapter.db = client["test_db"]
    return adapter


@pytest.fixture
def ticket_store(mongodb_adapter):
    return MongoRecordStore(mongodb_adapter, "tickets", Ticket)


def make_ticket(ticket_id, status=TicketStatus.PENDING):
    return Ticket(id=ticket_id, title=f"title {ticket_id}", content="c", status=status)


class TestMongoRecordStore:
    """Tests for the MongoDB-backed record store."""

    def test_init_creates_collection(self, mongodb_adapter, ticket_store):
        assert mongodb_adapter.collection_exists("tickets")

    def test_round_trip_preserves_fields(self, ticket_store):
        ticket = make_ticket("A")
        ticket.assigned_teams = [Role.CORE_NET]
        ticket.add_diagnosis(Role.CORE_NET, "HSS正常")
        ticket_store.insert_front(ticket)

        stored = ticket_store.get("A")
        assert stored == ticket

    def test_insert_front_orders_newest_first(self, ticket_store):
        for ticket_id in ("A", "B", "C"):
            ticket_store.insert_front(make_ticket(ticket_id))
        assert [t.id for t in ticket_store.list()] == ["C", "B", "A"]

    def test_insert_duplicate_raises(self, ticket_store):
        ticket_store.insert_front(make_ticket("A"))
        with pytest.raises(DuplicateIdError):
            ticket_store.insert_front(make_ticket("A"))

    def test_replace_keeps_position(self, ticket_store):
        ticket_store.insert_front(make_ticket("A"))
        ticket_store.insert_front(make_ticket("B"))

        updated = ticket_store.get("A")
        updated.status = TicketStatus.PROCESSING
        ticket_store.replace(updated)

        assert ticket_store.get("A").status == TicketStatus.PROCESSING
        assert [t.id for t in ticket_store.list()] == ["B", "A"]

    def test_replace_missing_raises(self, ticket_store):
        with pytest.raises(NotFoundError):
            ticket_store.replace(make_ticket("missing"))

    def test_find_with_enum_filter(self, ticket_store):
        ticket_store.insert_front(make_ticket("A", TicketStatus.RESOLVED))
        ticket_store.insert_front(make_ticket("B"))

        assert [t.id for t in ticket_store.find({"status": TicketStatus.RESOLVED})] == ["A"]
        assert ticket_store.count({"status": TicketStatus.PENDING}) == 1

    def test_update_many_on_notifications(self, mongodb_adapter):
        store = MongoRecordStore(mongodb_adapter, "notifications", Notification)
        for role in (Role.CRT, Role.CRT, Role.FRONT_SUPPORT):
            store.insert_front(
                Notification(receiver_role=role, message="m", ticket_id="T", ticket_title="t")
            )

        matched = store.update_many({"receiver_role": Role.CRT}, {"is_read": True})

        assert matched == 2
        assert store.count({"receiver_role": Role.CRT, "is_read": False}) == 0
        assert store.count({"receiver_role": Role.FRONT_SUPPORT, "is_read": False}) == 1
