"""Threadboard: a nested-comment discussion board service."""
