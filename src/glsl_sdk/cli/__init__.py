"""
GLSL SDK Command-Line Interface
===============================

This package provides command-line tools for the GLSL SDK:

- **glslfmt**: re-indent shader sources
- **glsltok**: dump tokens and categories, look up reference pages

Each tool is implemented as a Click-based CLI application with
comprehensive help and error reporting.
"""

__all__ = ["glslfmt", "glsltok"]
