"""
The MODEL layer contains pure data structures and geometry.
It has NO knowledge of the Visualization (PyVista).
It deals with samples, arrows and overlays.
"""
