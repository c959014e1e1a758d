"""Shared helpers for Llaves (currently just namespaced logging)."""

from llaves.utils.logger import get_logger

__all__ = ["get_logger"]
