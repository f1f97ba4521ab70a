"""
Photo gallery with image uploads.
"""
