"""
The VIEW layer draws model data. `renderer` defines the interface,
`pyvista_renderer` implements it on top of a pyvista Plotter.
"""
