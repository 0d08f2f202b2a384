"""Newsletter subscription endpoint."""
