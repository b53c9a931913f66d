"""CV deck: portfolio API with a persona chat and passive contact capture."""

__version__ = "0.1.0"
