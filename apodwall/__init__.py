"""
apodwall - set the NASA Astronomy Picture of the Day as your desktop wallpaper
"""

__version__ = "0.1.0"
