"""Asteroids: a frame-stepped simulation core with a pygame front end."""
