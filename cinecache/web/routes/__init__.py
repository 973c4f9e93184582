"""Routeurs JSON : /movies, /series, /taxonomy et /health."""
