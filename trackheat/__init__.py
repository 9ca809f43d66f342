"""trackheat - render GPS activity tracks as a composite heatmap image."""

__version__ = "0.1.0"
