"""Reconciles environment tags with default branches."""
