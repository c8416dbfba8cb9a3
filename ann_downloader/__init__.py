"""
ann-downloader - download listed-company announcements from cninfo
"""
APP_NAME = "ann-downloader"
__version__ = "1.0.2"
