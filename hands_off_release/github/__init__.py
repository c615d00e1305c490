"""Remote repository client for the GitHub REST API."""
