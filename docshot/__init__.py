"""
docshot: capture documentation previews and publish the screenshots to S3.
"""

__version__ = "1.0.0"
