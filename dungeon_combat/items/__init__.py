"""
Items system module for the dungeon combat engine.

This module contains the weapon definitions, with their damage, category,
health cost and the status effects they can inflict.
"""
