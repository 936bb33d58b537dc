"""Domain services behind the HTTP routes."""
