"""
Talent-Match: classification-based candidate auto-matching for the ATS backend.
"""

__app_name__ = "Talent-Match"
__version__ = "0.1.0"
