"""
Herald - per-guild welcome/goodbye notification bot for Discord.

Administrators configure a templated, styled message per guild and event
kind; Herald renders it with live member/guild data and posts it when
members join or leave.
"""

__version__ = "0.1.0"
