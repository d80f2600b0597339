"""Game domain services: round transitions and status snapshots.

This package contains the game rules that HTTP routes call into, keeping
transport concerns separated from core game mechanics.
"""
