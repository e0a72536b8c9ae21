# Procedural track generation for the DrawingBoard drone racing environment.

__version__ = "0.1.0"
