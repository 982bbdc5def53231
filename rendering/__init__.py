"""Pygame renderers for the dodgeball front end."""
