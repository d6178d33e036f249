"""Utility helpers for anime-renamer."""
