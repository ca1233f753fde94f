"""Tests for queue, exchange and binding operations."""

import math

import pytest

from hop import BadRequestError, DeleteQueueParameters, DetailsParameters, QueryParameters
from hop.client import ManagementClient
from hop.models import DestinationType, ExchangeInfo, GetAckMode, OutboundMessage, QueueInfo

from fake_broker import FakeBroker


class TestQueues:
    """Declare, read and delete queues."""

    def test_regex_paged_lookup_finds_exact_queue(
        self, client: ManagementClient, broker: FakeBroker
    ) -> None:
        """A regex filter with paging returns just the matching queue."""
        client.declare_queue("/", "hop.test", QueueInfo(durable=False))
        client.declare_queue("/", "hop.test.other", QueueInfo())
        client.declare_queue("/", "hopXtest", QueueInfo())

        query = QueryParameters().with_name("^hop\\.test$", use_regex=True).with_page(1, 10)
        page = client.get_queues_page("/", query)

        assert page.item_count == 1
        assert page.filtered_count == 1
        assert page.items[0].name == "hop.test"
        assert page.items[0].durable is False
        request = broker.requests_to("GET", "queues/%2F")[-1]
        assert list(request.url.params.multi_items()) == [
            ("name", "^hop\\.test$"),
            ("use_regex", "true"),
            ("page", "1"),
            ("page_size", "10"),
        ]

    def test_declare_is_idempotent(self, client: ManagementClient) -> None:
        client.declare_queue("/", "orders", QueueInfo(durable=True))
        client.declare_queue("/", "orders", QueueInfo(durable=True))
        assert [q.name for q in client.get_queues("/")] == ["orders"]

    def test_delete_is_idempotent(self, client: ManagementClient) -> None:
        """Deleting twice succeeds and the queue is then absent."""
        client.declare_queue("/", "orders", QueueInfo())
        client.delete_queue("/", "orders")
        client.delete_queue("/", "orders")
        assert client.get_queue("/", "orders") is None

    def test_inequivalent_redeclare_is_bad_request(self, client: ManagementClient) -> None:
        client.declare_queue("/", "orders", QueueInfo(durable=True))
        with pytest.raises(BadRequestError) as exc_info:
            client.declare_queue("/", "orders", QueueInfo(durable=False))
        assert exc_info.value.status == 400
        assert "inequivalent arg 'durable'" in exc_info.value.reason

    def test_missing_vhost_is_absent(self, client: ManagementClient) -> None:
        """Lookups in a vhost that does not exist return None instead of raising."""
        assert client.get_queue("nope", "orders") is None
        assert client.get_queues("nope") is None
        assert client.get_queues_page("nope") is None
        assert client.get_exchange("nope", "amq.direct") is None
        assert client.get_bindings("nope") is None

    def test_conditional_delete(self, client: ManagementClient, broker: FakeBroker) -> None:
        client.declare_queue("/", "busy", QueueInfo())
        client.publish("/", "amq.default", "busy", OutboundMessage(payload="hi"))
        with pytest.raises(BadRequestError):
            client.delete_queue("/", "busy", DeleteQueueParameters(if_empty=True, if_unused=True))
        request = broker.requests_to("DELETE", "queues/%2F/busy")[-1]
        assert request.url.params["if-empty"] == "true"
        assert request.url.params["if-unused"] == "true"
        assert client.get_queue("/", "busy") is not None

    def test_details_request_samples(self, client: ManagementClient, broker: FakeBroker) -> None:
        client.declare_queue("/", "q", QueueInfo())
        queue = client.get_queue("/", "q", DetailsParameters().message_rates(60, 5))
        assert queue.messages_details is not None
        assert broker.requests_to("GET", "queues/%2F/q")[-1].url.params["msg_rates_age"] == "60"

    def test_list_across_vhosts(self, client: ManagementClient, broker: FakeBroker) -> None:
        broker.add_vhost("other")
        client.declare_queue("/", "a", QueueInfo())
        client.declare_queue("other", "b", QueueInfo())
        assert sorted(q.name for q in client.get_queues()) == ["a", "b"]
        assert [q.vhost for q in client.get_queues("other")] == ["other"]

    def test_declare_without_name_sends_nothing(
        self, client: ManagementClient, broker: FakeBroker
    ) -> None:
        with pytest.raises(ValueError):
            client.declare_queue("/", "", QueueInfo())
        assert broker.requests == []

    def test_exclusive_is_rejected(self, client: ManagementClient, broker: FakeBroker) -> None:
        with pytest.raises(ValueError, match="exclusive"):
            client.declare_queue("/", "mine", QueueInfo(exclusive=True))
        assert broker.requests == []


class TestPagination:
    """Page arithmetic against a populated vhost."""

    @pytest.fixture
    def populated(self, client: ManagementClient) -> ManagementClient:
        for i in range(23):
            client.declare_queue("/", f"q{i:02d}", QueueInfo())
        client.declare_queue("/", "unrelated", QueueInfo())
        return client

    def test_pages_cover_filtered_set(self, populated: ManagementClient) -> None:
        query = QueryParameters().with_name("^q", use_regex=True).with_page(1, 10)
        page = populated.get_queues_page("/", query)
        assert page.page_count == math.ceil(23 / 10)
        assert page.filtered_count == 23
        assert page.total_count == 24

        seen = list(page.items)
        while page.has_next:
            query = query.next_page(page)
            page = populated.get_queues_page("/", query)
            seen.extend(page.items)
        assert len(seen) == page.filtered_count
        assert len({q.name for q in seen}) == 23

    def test_page_after_last_is_empty(self, populated: ManagementClient) -> None:
        query = QueryParameters().with_page(1, 10)
        last = populated.get_queues_page("/", query)
        beyond = populated.get_queues_page("/", query.with_page(last.page_count + 1))
        assert beyond.item_count == 0
        assert beyond.items == []

    def test_unpaginated_query_is_sent_as_first_page(self, populated: ManagementClient) -> None:
        page = populated.get_queues_page("/", QueryParameters().with_sort("name", reverse=True))
        assert page.page == 1
        assert page.items[0].name == "unrelated"

    def test_plain_list_is_unpaged(self, populated: ManagementClient, broker: FakeBroker) -> None:
        queues = populated.get_queues("/", QueryParameters().with_name("q1"))
        assert sorted(q.name for q in queues) == [f"q1{i}" for i in range(10)]
        assert "page" not in broker.requests_to("GET", "queues/%2F")[-1].url.params


class TestMessages:
    """Publishing and fetching through the API."""

    def test_publish_and_fetch(self, client: ManagementClient) -> None:
        client.declare_queue("/", "inbox", QueueInfo())
        assert client.publish("/", "amq.default", "inbox", OutboundMessage(payload="hello"))

        peeked = client.get_message("/", "inbox")
        assert peeked.payload == "hello"
        assert peeked.redelivered is False

        taken = client.get_messages("/", "inbox", 5, ack_mode=GetAckMode.ACK_REQUEUE_FALSE)
        assert [m.payload for m in taken] == ["hello"]
        assert taken[0].redelivered is True
        assert client.get_message("/", "inbox") is None

    def test_unroutable_publish(self, client: ManagementClient) -> None:
        assert not client.publish("/", "amq.direct", "nowhere", OutboundMessage(payload="x"))

    def test_purge(self, client: ManagementClient) -> None:
        client.declare_queue("/", "inbox", QueueInfo())
        client.publish("/", "amq.default", "inbox", OutboundMessage(payload="1"))
        client.publish("/", "amq.default", "inbox", OutboundMessage(payload="2"))
        assert client.get_queue("/", "inbox").messages == 2
        client.purge_queue("/", "inbox")
        assert client.get_queue("/", "inbox").messages == 0

    def test_get_messages_from_missing_queue(self, client: ManagementClient) -> None:
        assert client.get_messages("/", "missing", 1) is None

    def test_count_must_be_positive(self, client: ManagementClient) -> None:
        with pytest.raises(ValueError):
            client.get_messages("/", "inbox", 0)


class TestExchangesAndBindings:
    """Exchanges and the bindings between them."""

    def test_exchange_lifecycle(self, client: ManagementClient) -> None:
        client.declare_exchange("/", "events", ExchangeInfo(type="topic", durable=False))
        client.declare_exchange("/", "events", ExchangeInfo(type="topic", durable=False))
        exchange = client.get_exchange("/", "events")
        assert exchange.type == "topic"
        assert exchange.durable is False
        assert "events" in [e.name for e in client.get_exchanges("/")]

        client.delete_exchange("/", "events")
        client.delete_exchange("/", "events")
        assert client.get_exchange("/", "events") is None

    def test_exchanges_page(self, client: ManagementClient) -> None:
        page = client.get_exchanges_page("/", QueryParameters().with_page(1, 2))
        assert page.item_count == 2
        assert page.total_count == 4

    def test_queue_binding(self, client: ManagementClient) -> None:
        client.declare_exchange("/", "events", ExchangeInfo(type="direct"))
        client.declare_queue("/", "audit", QueueInfo())
        client.bind_queue("/", "audit", "events", "user.created", {"x-match": "all"})
        client.bind_queue("/", "audit", "events", "user.deleted")

        between = client.get_queue_bindings_between("/", "events", "audit")
        assert sorted(b.routing_key for b in between) == ["user.created", "user.deleted"]
        assert between[0].destination_type is DestinationType.QUEUE
        assert len(client.get_bindings_by_source("/", "events")) == 2
        assert len(client.get_queue_bindings("/", "audit")) == 2
        assert client.publish("/", "events", "user.created", OutboundMessage(payload="{}"))

        client.unbind_queue("/", "audit", "events", "user.created")
        client.unbind_queue("/", "audit", "events", "user.created")
        assert [b.routing_key for b in client.get_queue_bindings_between("/", "events", "audit")] == [
            "user.deleted"
        ]

    def test_exchange_binding(self, client: ManagementClient) -> None:
        client.declare_exchange("/", "upstream", ExchangeInfo(type="fanout"))
        client.declare_exchange("/", "downstream", ExchangeInfo(type="fanout"))
        client.bind_exchange("/", "downstream", "upstream", "")

        by_destination = client.get_exchange_bindings_by_destination("/", "downstream")
        assert [b.source for b in by_destination] == ["upstream"]
        between = client.get_exchange_bindings_between("/", "upstream", "downstream")
        assert between[0].destination_type is DestinationType.EXCHANGE
        assert between[0].properties_key == "~"

        client.unbind_exchange("/", "downstream", "upstream")
        assert client.get_exchange_bindings_between("/", "upstream", "downstream") == []

    def test_all_bindings(self, client: ManagementClient, broker: FakeBroker) -> None:
        broker.add_vhost("v2")
        client.declare_queue("v2", "q", QueueInfo())
        client.bind_queue("v2", "q", "amq.direct", "k")
        assert [b.vhost for b in client.get_bindings()] == ["v2"]
        assert client.get_bindings("/") == []
