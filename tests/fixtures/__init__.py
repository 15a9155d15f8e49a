"""Shared test helpers.

Importable as ``tests.fixtures``; holds plain helper classes only.
Pytest fixtures live in the conftest.py files.
"""
