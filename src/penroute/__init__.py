"""Penroute - Plotter-ready routes from density fields.

Penroute samples points under a density field, partitions the page into
Voronoi cells and stitches the points into routes that stop at the first
collision with geometry that is already drawn. The result is a list of
point sequences ready to be handed to a pen-plotter renderer.

Example:
    $ penroute --seed 10

This samples cells over an A4 portrait page and prints a summary of the
routes built for each cell.
"""

__version__ = "0.1.0"
__author__ = "Penroute contributors"

__all__ = ["__author__", "__version__"]
