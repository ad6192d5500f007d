"""gvm — manage side-by-side Go SDK installations."""

__version__ = "0.1.0"
