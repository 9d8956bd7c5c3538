"""A small 2D pygame game: a duck walking around a wrapping world, with menus and pause."""

__version__ = "0.1.0"