#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path
from typing import List

import yaml

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from ge_offer_app.config.loader import ConfigLoader
from ge_offer_app.config.validation import ConfigValidator, ValidationError
from ge_offer_app.errors import ConfigurationError


def profile_names(loader: ConfigLoader) -> List[str]:
    """Names of all profiles in profiles.yaml."""
    profiles_file = loader.config_dir / "profiles.yaml"
    if not profiles_file.exists():
        return []

    with open(profiles_file) as f:
        return sorted((yaml.safe_load(f) or {}).get("profiles", {}))


def validate_profile(loader: ConfigLoader, profile: str) -> List[ValidationError]:
    """Validate the merged configuration for one profile."""
    return ConfigValidator.validate_config(loader.merge_config(profile))


def main():
    """Main validation function."""
    print("🔍 Validating GE offer analysis configuration...")

    loader = ConfigLoader.create()
    all_valid = True

    for profile in [None, *profile_names(loader)]:
        label = profile or "defaults"
        print(f"\n📊 Validating {label}...")

        try:
            errors = validate_profile(loader, profile)
        except ConfigurationError as e:
            print(f"❌ {e}: {', '.join(map(str, e.errors))}")
            all_valid = False
            continue

        if errors:
            print(f"❌ Found {len(errors)} validation errors:")
            for error in errors:
                print(f"  • {error.field}: {error.message} (value: {error.value})")
            all_valid = False
            continue

        try:
            loader.build_config(profile)
        except ConfigurationError as e:
            print(f"❌ {e}: {', '.join(map(str, e.errors))}")
            all_valid = False
        else:
            print(f"✅ {label} configuration is valid")

    if all_valid:
        print(f"\n🎉 All configuration validation passed!")
        sys.exit(0)
    else:
        print(f"\n❌ Configuration validation failed!")
        sys.exit(1)


if __name__ == "__main__":
    main()
