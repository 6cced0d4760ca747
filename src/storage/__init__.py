"""Storage addressing layer.

This module derives raw storage keys the way the ledger does and
assembles them into genesis override documents.
"""
