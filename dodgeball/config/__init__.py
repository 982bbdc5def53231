"""Configuration package for the dodgeball simulation.

Constants live in topic modules (physics, ai, display); match_config bundles
what a single match accepts at start.
"""
