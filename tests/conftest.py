"""Pytest configuration and shared fixtures."""

import pytest
from decimal import Decimal
from typing import Any, Dict, List
from unittest.mock import Mock

import orjson

from portfolio_client.data.models import PositionRecord
from portfolio_client.portfolio.book import PositionBook
from portfolio_client.session import SessionController
from portfolio_client.transport.memory import InMemoryTransport
from portfolio_client.view.base import PortfolioView


@pytest.fixture
def sample_positions() -> List[Dict[str, Any]]:
    """Snapshot entries as they arrive on the wire."""
    return [
        {"ticker": "ABC", "company": "Acme", "price": 10.00, "shares": 5},
        {"ticker": "XYZ", "company": "Xylo Corp", "price": 25.50, "shares": 10},
        {"ticker": "QQQ", "company": "Quux Inc", "price": 3.25, "shares": 0},
    ]


@pytest.fixture
def snapshot_payload(sample_positions) -> bytes:
    return orjson.dumps(sample_positions)


@pytest.fixture
def abc_record() -> PositionRecord:
    return PositionRecord(ticker="ABC", company="Acme", price=Decimal("10.00"), shares=5)


@pytest.fixture
def view() -> Mock:
    """View collaborator that records every callback."""
    return Mock(spec=PortfolioView)


@pytest.fixture
def book(view) -> PositionBook:
    return PositionBook(view=view)


@pytest.fixture
def transport() -> InMemoryTransport:
    return InMemoryTransport(headers={"user-name": "fabrice", "queue-suffix": "-user123"})


@pytest.fixture
def controller(transport, view) -> SessionController:
    return SessionController(transport=transport, view=view)


@pytest.fixture
def connected_controller(controller, transport, snapshot_payload) -> SessionController:
    """Controller with a live session and the sample snapshot loaded."""
    controller.connect()
    transport.publish("/app/positions", snapshot_payload)
    return controller
