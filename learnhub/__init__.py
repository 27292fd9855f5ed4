"""
LearnHub application package.

Course catalog, scroll-driven lesson player and learner progress tracking.
"""
