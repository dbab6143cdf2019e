"""Connectivity tracking and server health probing."""
