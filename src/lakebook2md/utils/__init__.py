"""Utilities for lakebook2md."""
