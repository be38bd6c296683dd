"""elbow-router: orthogonal connector routing for bound diagram arrows."""

__version__ = "0.1.0"
