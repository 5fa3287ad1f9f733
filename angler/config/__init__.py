"""Configuration package for the encounter engine.

Tuning constants live in ``angler.config.fishing``; the per-phase config
dataclasses in ``angler.config.encounter_config`` default from them.
"""
