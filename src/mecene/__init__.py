"""
Mecene - campaign data access for a crowdfunding application.
"""

__version__ = "0.1.0"
