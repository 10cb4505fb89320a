"""
chromasplit - YCbCr / HSV channel decomposition for raster images.

Converts RGBA pixel buffers between RGB, YCbCr and HSV, applies
per-channel percentage scaling, and renders single-channel views.
"""

__version__ = "0.1.0"
