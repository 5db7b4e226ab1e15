"""Command line and orchestration for the video thumbnail grid tool."""

__version__ = "0.1.0"
