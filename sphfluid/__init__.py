"""Two-dimensional SPH fluid simulation with rigid boundaries and a pygame viewer."""

__version__ = "1.0.0"