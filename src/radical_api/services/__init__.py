"""Service layer for the Radical API."""
