"""HTTP routers for the Radical API."""
