"""User management service with a paginated change log."""
