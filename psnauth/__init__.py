"""
psnauth - PSN Remote Play OAuth token helper
"""

__version__ = "0.1.0"
__logo__ = "🎮"
