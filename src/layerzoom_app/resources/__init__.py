"""Styling constants for the debug app."""
