"""Update jlenv and its plugins with git."""

__version__ = '1.0.0'
