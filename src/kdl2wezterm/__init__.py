"""Convert KDL pane layouts into WezTerm startup scripts."""

__version__ = "0.1.0"
