"""Shared fixtures: an in-memory broker and clients wired to it."""

import pytest

from hop import ManagementClient

from fake_broker import FakeBroker


@pytest.fixture
def broker() -> FakeBroker:
    """A current broker."""
    return FakeBroker()


@pytest.fixture
def client(broker: FakeBroker) -> ManagementClient:
    """Client for ``broker``."""
    with broker.client() as c:
        yield c


@pytest.fixture
def legacy_broker() -> FakeBroker:
    """A broker that predates every gated capability."""
    return FakeBroker(version="3.5.7")


@pytest.fixture
def legacy_client(legacy_broker: FakeBroker) -> ManagementClient:
    with legacy_broker.client() as c:
        yield c
