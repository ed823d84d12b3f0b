"""Rovart makeup studio booking backend."""
