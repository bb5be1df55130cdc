#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path
from typing import List

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from tickbridge.config.loader import ConfigLoader
from tickbridge.config.validation import ConfigValidator, ValidationError
from tickbridge.errors import ConfigurationError


def validate_config_file(config_path: Path) -> List[ValidationError]:
    """Validate the merged configuration for one YAML file."""
    loader = ConfigLoader.create(config_path)
    return ConfigValidator.validate_config(loader.merge_config())


def main():
    """Main validation function."""
    print("🔍 Validating TickBridge configuration...")

    config_files = [Path(arg) for arg in sys.argv[1:]] or [project_root / "config" / "bridge.yaml"]
    all_valid = True

    for config_path in config_files:
        print(f"\n📄 Validating {config_path}...")

        try:
            errors = validate_config_file(config_path)
        except (ConfigurationError, OSError) as e:
            print(f"❌ Error loading {config_path}: {e}")
            all_valid = False
            continue

        if errors:
            print(f"❌ Found {len(errors)} validation errors:")
            for error in errors:
                print(f"  • {error.field}: {error.message} (value: {error.value})")
            all_valid = False
        else:
            config = ConfigLoader.create(config_path).load()
            print(f"✅ {config_path.name} is valid "
                  f"(consumer {config.endpoint.address}, reconnect every "
                  f"{config.reconnect.interval_seconds}s)")

    # Command line style overrides on top of the shipped file
    print(f"\n📋 Testing override precedence...")
    loader = ConfigLoader.create(config_files[0])
    try:
        config = loader.load({"endpoint": {"port": 9100}, "trading": {"position_label": "SMOKE"}})
        if config.endpoint.port == 9100 and config.trading.position_label == "SMOKE":
            print(f"✅ Override precedence works")
        else:
            print(f"❌ Overrides were not applied")
            all_valid = False
    except ConfigurationError as e:
        print(f"❌ Error testing overrides: {e}")
        all_valid = False

    if all_valid:
        print(f"\n🎉 All configuration validation passed!")
        sys.exit(0)
    else:
        print(f"\n❌ Configuration validation failed!")
        sys.exit(1)


if __name__ == "__main__":
    main()
