"""
                Food Ordering Backend

Users sign up, log in with a cookie-borne session token and manage
their orders; administrators curate the restaurant menu and review
every order.

Version: 1.0.0
License: MIT
"""

__version__ = "1.0.0"
