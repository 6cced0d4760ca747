"""Simulation tool integration.

This module runs the referendum simulation CLI as a subprocess and
checks its captured output.
"""
