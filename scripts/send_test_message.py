"""Send a single WhatsApp message through the configured provider.

Usage:
    DATABASE_URL=... uv run python scripts/send_test_message.py <phone> <message>

Requires:
    - DATABASE_URL pointing to a database with system_settings and communication_log
    - Provider settings in system_settings (or EVOLUTION_* / WAHA_* env fallbacks)

This script is for local/staging validation of gateway credentials only.
"""

from __future__ import annotations

import json
import os
import sys


def main() -> None:
    if len(sys.argv) < 3:
        print("Usage: uv run python scripts/send_test_message.py <phone> <message>")
        sys.exit(2)

    raw_phone, message = sys.argv[1], sys.argv[2]

    if not os.environ.get("DATABASE_URL"):
        print("ERROR: DATABASE_URL not set")
        sys.exit(1)

    # Import after env validation so missing DB doesn't blow up on import
    from leadzap.errors import ConfigurationError
    from leadzap.phone import format_phone_display, is_valid_brazilian_phone, normalize_phone_number
    from leadzap.whatsapp.dispatcher import dispatch_message

    if not is_valid_brazilian_phone(raw_phone):
        print(f"ERROR: not a valid Brazilian mobile number: {raw_phone}")
        sys.exit(1)

    phone = normalize_phone_number(raw_phone)
    print(f"Sending to {format_phone_display(phone)} ...")

    try:
        result = dispatch_message(phone, message)
    except ConfigurationError as e:
        print(f"ERROR: {e}")
        sys.exit(1)

    print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False, default=str))
    sys.exit(0 if result.success else 1)


if __name__ == "__main__":
    main()
