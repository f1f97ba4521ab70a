"""
Weekly schedule with nested games.
"""
