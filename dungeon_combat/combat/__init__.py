"""
Combat system module for the dungeon combat engine.

This module handles combatants, counter resolution, death prevention and the
simultaneous resolution of a turn.
"""
