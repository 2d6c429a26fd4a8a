#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path
from typing import Optional

from portfolio_client.config.loader import ConfigLoader
from portfolio_client.config.validation import ConfigValidator


def main(config_dir: Optional[str] = None) -> None:
    """Validate client.yaml merged over the defaults."""
    loader = ConfigLoader.create(Path(config_dir) if config_dir else None)
    config_file = loader.config_dir / "client.yaml"

    print(f"🔍 Validating {config_file}...")
    if not config_file.exists():
        print("⚠️  No client.yaml found, validating defaults only")

    try:
        config = loader.merge_config()
    except Exception as e:
        print(f"❌ Could not read configuration: {e}")
        sys.exit(1)

    errors = ConfigValidator.validate_config(config)
    if errors:
        print(f"❌ Found {len(errors)} validation errors:")
        for error in errors:
            print(f"  • {error.field}: {error.message} (value: {error.value!r})")
        sys.exit(1)

    channels = config["channels"]
    print("✅ Configuration is valid")
    print(f"  snapshot:  {channels['positions_snapshot']}")
    print(f"  quotes:    {channels['price_quote']}")
    print(f"  updates:   {channels['position_update']}<suffix>")
    print(f"  errors:    {channels['errors']}<suffix>")
    print(f"  trades:    {channels['trade_request']}")
    sys.exit(0)


if __name__ == "__main__":
    main(sys.argv[1] if len(sys.argv) > 1 else None)
