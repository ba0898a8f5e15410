"""Domain layer for daily wellness goals.

Goal formulas, fallback generation and change detection, decoupled from
storage and scheduling infrastructure.
"""
