"""Install, register and uninstall user fonts in a managed font directory."""

__version__ = "0.1.0"

__all__ = ["__version__"]