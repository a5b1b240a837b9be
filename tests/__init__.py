# Trolley Test Suite
#
# This package contains:
# - API tests (pytest + anyio, backend faked with httpx.MockTransport)
# - Unit tests for validation, derived state, session storage and dates
# - CLI tests (click.testing.CliRunner)
#
# Run with: pytest [-m smoke|auth|orders|...]
