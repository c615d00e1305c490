"""Keeps environment tags pointed at the tip of each repository's default branch."""
