"""Utility helpers for findpeople."""
