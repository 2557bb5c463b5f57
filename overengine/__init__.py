"""Core pieces of a small 2D game engine: events, layers, undo, profiling, headless rendering, particles and docking layouts."""

__version__ = "0.1.0"