"""
Core system module for the dungeon combat engine.

This module contains the fundamental components of the engine, including the
tuning constants, floor scaling, content loading, logging and error handling.
"""
