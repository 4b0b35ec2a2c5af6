"""Constants shared across objperms modules."""
