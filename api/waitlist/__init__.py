"""
Waitlist check-in queue and the stale-entry sweeper.
"""
