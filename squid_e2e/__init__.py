"""End-to-end tests for a Squid deployment (API and browser UI)."""
