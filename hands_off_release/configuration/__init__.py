"""Configuration, authentication, and command line handling."""
