"""Core settings and exceptions."""
