"""A small interactive shell with quoting, variable expansion, redirection and a few builtins."""

__version__ = "0.1.0"
__all__ = ["builtins", "external", "parser", "redirection", "redirparse", "shell", "tokens"]