"""
Game catalog (game types and table limits).
"""
