#!/usr/bin/env python3
"""
Basic Usage Example - Portfolio Client

This script demonstrates a full client session on the in-memory loopback
transport. It shows how to:
- Connect and receive the positions snapshot
- Apply price quotes and position updates
- Open the trade dialog, validate and submit a trade
- Read aggregates and the notification log

Run: python examples/basic_usage.py
"""

import random
from decimal import Decimal
from typing import Any, Dict, List

import orjson

from portfolio_client.config.loader import ConfigLoader
from portfolio_client.data.models import Position, PriceSample, TradeAction
from portfolio_client.logging.config import configure_logging
from portfolio_client.session import SessionController
from portfolio_client.trade.workflow import TradeWorkflow
from portfolio_client.transport.memory import InMemoryTransport
from portfolio_client.utils.time import format_timestamp
from portfolio_client.view.base import PortfolioView


class ConsoleView(PortfolioView):
    """Prints what a real renderer would draw."""

    def on_positions_loaded(self, positions):
        for position in positions:
            print(f"  {position.ticker:<6} {position.company:<22} {position.formatted_price:>10} "
                  f"x {position.shares:<4} = {position.formatted_value}")

    def on_quote(self, ticker: str, sample: PriceSample) -> None:
        print(f"  chart[{ticker}] <- {format_timestamp(sample.timestamp)} ${sample.price}")

    def on_notification(self, text: str) -> None:
        print(f"  notification: {text}")

    def on_trade_dialog_opened(self, action: TradeAction, position: Position) -> None:
        print(f"  dialog open: {action.value} {position.ticker} (held {position.shares})")

    def on_trade_dialog_closed(self) -> None:
        print("  dialog closed")


def create_snapshot() -> List[Dict[str, Any]]:
    """Create a sample positions snapshot."""
    return [
        {"ticker": "CTXS", "company": "Citrix Systems, Inc.", "price": 24.30, "shares": 75},
        {"ticker": "DELL", "company": "Dell Inc.", "price": 13.44, "shares": 50},
        {"ticker": "EMC", "company": "EMC Corporation", "price": 24.30, "shares": 35},
        {"ticker": "GOOG", "company": "Google Inc.", "price": 905.09, "shares": 5},
        {"ticker": "VMW", "company": "VMware, Inc.", "price": 65.19, "shares": 40},
    ]


def print_totals(controller: SessionController) -> None:
    totals = controller.book.aggregates()
    print(f"  total shares: {totals.total_shares}, total value: {totals.formatted_total_value}")


def main() -> None:
    config = ConfigLoader.create().load({"logging": {"level": "WARNING"}})
    configure_logging(level=config.logging.level, format_json=config.logging.format_json)

    suffix = "-demo1"
    transport = InMemoryTransport(headers={"user-name": "fabrice", "queue-suffix": suffix})
    controller = SessionController(transport=transport, view=ConsoleView(), config=config)
    workflow = TradeWorkflow(controller)

    print("🔌 Connecting...")
    controller.connect()
    print(f"  connected as {controller.username}")

    print("\n📋 Snapshot")
    transport.publish("/app/positions", orjson.dumps(create_snapshot()))
    print_totals(controller)

    print("\n📈 Quotes")
    rng = random.Random(7)
    for _ in range(5):
        position = rng.choice(list(controller.book.rows()))
        move = Decimal(str(round(rng.uniform(-0.02, 0.02), 4)))
        price = (position.price * (1 + move)).quantize(Decimal("0.01"))
        transport.publish(
            f"/topic/price.stock.{position.ticker}",
            orjson.dumps({"ticker": position.ticker, "price": str(price)})
        )
        print(f"  {position.ticker}: {position.formatted_price} "
              f"({position.direction.value} {position.formatted_change}%)")

    print("\n💱 Trade")
    workflow.show_sell(controller.book.get("DELL"))
    workflow.shares_requested = 80
    if workflow.submit() is None:
        print(f"  rejected: {workflow.error_message}")
    workflow.shares_requested = 20
    request = workflow.submit()
    print(f"  sent: {request.to_payload()}")

    # The server answers on the session's private channels
    transport.publish(f"/queue/position-updates{suffix}",
                      orjson.dumps({"ticker": "DELL", "shares": 30}))
    transport.publish(f"/queue/errors{suffix}", "Trade for GOOG rejected: market closed")
    print_totals(controller)

    print("\n🔔 Notifications")
    for notification in controller.notifications.all():
        print(f"  {notification.text}")

    controller.logout()
    print("\n👋 Disconnected")


if __name__ == "__main__":
    main()
