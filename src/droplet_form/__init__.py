"""Interactive terminal form for creating DigitalOcean Droplets"""

__version__ = "1.0.0"
