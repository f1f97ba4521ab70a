"""
Customer reviews.
"""
