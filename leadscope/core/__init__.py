"""Core pipeline for leadscope."""
