"""
WealthTrack personal finance calculation engine.
"""
