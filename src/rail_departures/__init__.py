"""Live National Rail departure and arrival boards in the terminal."""

__version__ = "2.1.2"
