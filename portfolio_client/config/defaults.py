"""Default configuration parameters for the portfolio client."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ChannelParams:
    """Logical channel names on the publish/subscribe transport."""
    positions_snapshot: str = "/app/positions"            # Private, one-shot snapshot
    price_quote: str = "/topic/price.stock.*"             # Broadcast, wildcard per ticker
    position_update: str = "/queue/position-updates"      # Private, suffix-scoped
    errors: str = "/queue/errors"                         # Private, suffix-scoped
    trade_request: str = "/app/trade"                     # Outbound

    def position_update_for(self, routing_suffix: str) -> str:
        """Position update channel scoped to one session."""
        return self.position_update + routing_suffix

    def errors_for(self, routing_suffix: str) -> str:
        """Error channel scoped to one session."""
        return self.errors + routing_suffix


@dataclass(frozen=True)
class SessionParams:
    """Handshake header names carrying the session identity."""
    identity_header: str = "user-name"
    suffix_header: str = "queue-suffix"


@dataclass(frozen=True)
class DisplayParams:
    """Display formatting parameters."""
    currency_symbol: str = "$"
    decimal_places: int = 2


@dataclass(frozen=True)
class LoggingParams:
    """Logging parameters passed to configure_logging."""
    level: str = "INFO"
    format_json: bool = False


@dataclass(frozen=True)
class ClientConfig:
    """Complete client configuration."""
    channels: ChannelParams
    session: SessionParams
    display: DisplayParams
    logging: LoggingParams


def get_default_config() -> ClientConfig:
    """Get the default configuration instance."""
    return ClientConfig(
        channels=ChannelParams(),
        session=SessionParams(),
        display=DisplayParams(),
        logging=LoggingParams(),
    )
