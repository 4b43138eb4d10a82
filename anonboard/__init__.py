"""
AnonBoard - Anonymous Message Board Backend

Boards, threads and replies with password-protected deletion
and moderator reporting. No accounts, no sessions.
"""

__version__ = "0.1.0"
__author__ = "AnonBoard Project"
