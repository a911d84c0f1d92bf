"""
Actions system module for the dungeon combat engine.

This module contains the action a combatant chooses for a turn and the static
definitions of abilities and spells, together with the ability-effect
calculator.
"""
