#!/usr/bin/env python3
"""Configuration validation script."""

import sys
from pathlib import Path
from typing import List

# Add the project root to the Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from txplan_app.config.loader import ConfigLoader
from txplan_app.config.validation import ConfigValidator, ValidationError
from txplan_app.errors import DataQualityError


def validate_settings(loader: ConfigLoader) -> List[ValidationError]:
    """Validate settings.yaml merged over the defaults."""
    return ConfigValidator.validate_config(loader.merge_config())


def main():
    """Main validation function."""
    config_dir = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    loader = ConfigLoader.create(config_dir)
    print(f"🔍 Validating configuration in {loader.config_dir}...")

    all_valid = True

    print("\n⚙️  Validating settings.yaml...")
    try:
        errors = validate_settings(loader)
        if errors:
            print(f"❌ Found {len(errors)} validation errors:")
            for error in errors:
                print(f"  • {error.field}: {error.message} (value: {error.value})")
            all_valid = False
        else:
            print("✅ Settings are valid")
    except DataQualityError as e:
        print(f"❌ Error reading settings: {e}")
        all_valid = False

    print("\n📚 Validating categories.yaml...")
    try:
        catalog = loader.load_catalog()
        print(f"✅ {len(catalog)} categories loaded")
    except DataQualityError as e:
        print(f"❌ Invalid category catalog: {e}")
        all_valid = False

    if all_valid:
        print("\n🎉 All configuration validation passed!")
        sys.exit(0)
    else:
        print("\n❌ Configuration validation failed!")
        sys.exit(1)


if __name__ == "__main__":
    main()
