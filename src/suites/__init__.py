"""Integration suite orchestration.

This module groups per-track and scenario sub-tests and reports their
outcomes as one structured report.
"""
