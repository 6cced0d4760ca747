"""Live chain interaction layer.

This module connects to running nodes, tracks fork points, and submits
signed extrinsics through to finalization.
"""
