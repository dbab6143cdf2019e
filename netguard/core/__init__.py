"""Core application layer.

Contains the command handler orchestrating CLI use cases.
"""
