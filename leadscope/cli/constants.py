"""Exit codes shared by CLI commands."""

VALIDATION_EXIT_CODE = 10
NOT_FOUND_EXIT_CODE = 11
PROVIDER_EXIT_CODE = 20
SYSTEM_EXIT_CODE = 30
