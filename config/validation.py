# config/validation.py

"""
Environment variable validation for the In-Kind Tracker application.
Validates required environment variables at startup.
"""

import os
import sys
from typing import List, Tuple

_POSITIVE_INT_SETTINGS = (
    "IMPORTER_DONATION_MAX_BYTES",
    "IMPORTER_INDIVIDUAL_MAX_BYTES",
    "IMPORTER_ORG_CODE_ATTEMPTS",
)
_VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def validate_environment(flask_env: str = None) -> Tuple[bool, List[str]]:
    """
    Validate required environment variables.

    Args:
        flask_env: Flask environment (development, production, testing)
                  If None, reads from FLASK_ENV environment variable

    Returns:
        Tuple of (is_valid, list_of_errors)
    """
    if flask_env is None:
        flask_env = os.environ.get("FLASK_ENV", "development")

    errors = []

    # Only validate in production
    if flask_env != "production":
        return True, []

    secret_key = os.environ.get("SECRET_KEY", "")
    if not secret_key or secret_key == "your-secret-key" or secret_key == "your_secret_key":
        errors.append(
            "SECRET_KEY is required in production and must not be the default value. "
            'Generate a secure key: python -c "import secrets; print(secrets.token_hex(32))"'
        )

    database_url = os.environ.get("DATABASE_URL")
    if not database_url:
        errors.append(
            "DATABASE_URL is required in production. "
            "Set it to your PostgreSQL connection string."
        )

    for name in _POSITIVE_INT_SETTINGS:
        raw = os.environ.get(name)
        if raw is None:
            continue
        try:
            if int(raw) < 1:
                raise ValueError(raw)
        except ValueError:
            errors.append(f"{name} must be a positive integer (got '{raw}').")

    log_level = os.environ.get("LOG_LEVEL")
    if log_level and log_level.upper() not in _VALID_LOG_LEVELS:
        errors.append(f"LOG_LEVEL must be one of {', '.join(sorted(_VALID_LOG_LEVELS))} (got '{log_level}').")

    is_valid = len(errors) == 0
    return is_valid, errors


def validate_and_exit(flask_env: str = None) -> None:
    """
    Validate environment variables and exit with error if validation fails.
    Intended to be called at application startup.

    Args:
        flask_env: Flask environment (development, production, testing)
    """
    is_valid, errors = validate_environment(flask_env)

    if not is_valid:
        print("=" * 80, file=sys.stderr)
        print("ENVIRONMENT VALIDATION FAILED", file=sys.stderr)
        print("=" * 80, file=sys.stderr)
        print("\nThe following environment variables are missing or invalid:\n", file=sys.stderr)

        for i, error in enumerate(errors, 1):
            print(f"{i}. {error}", file=sys.stderr)

        print("\n" + "=" * 80, file=sys.stderr)
        print("Please check your .env file or environment variables.", file=sys.stderr)
        print("=" * 80, file=sys.stderr)

        sys.exit(1)
