"""
Deterministic takeoff engine.

Pure Python math. No I/O, no shared state.
Given an immutable SteelItem, produce exact linear meters and kilograms per
gauge for its longitudinal bars and its stirrups (or footing cage), plus the
cross-section grids used to place bars.
"""
