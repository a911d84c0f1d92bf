"""
Effects system module for the dungeon combat engine.

This module contains the primitive per-turn effects generated from actions,
the status effect definitions and the status effect engine that applies and
ticks them.
"""
