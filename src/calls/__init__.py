"""Runtime call construction layer.

This module resolves calls by name against live metadata and builds
the preimage and referendum payloads used by the suites.
"""
