"""
Email scheduler - accepts emails to send later and delivers them when due.
"""

__version__ = "1.0.0"
