"""Eden: a static-site build engine driven by data-described templates."""

__version__ = "0.3.0"
