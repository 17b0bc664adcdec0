"""discord.py cogs: slash commands and member event listeners."""
