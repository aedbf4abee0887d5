"""Earthquake city map.

Classifies earthquakes against country polygons, computes threat circles
around them, and drives hover/click filtering between earthquakes and
cities. See quakemap.core for the logic and quakemap.shell for I/O.
"""
