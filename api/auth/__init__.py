"""
Admin registration, login and bearer-token auth.
"""
