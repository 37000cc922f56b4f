"""Textbook data structure exercises."""
