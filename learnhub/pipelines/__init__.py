"""
LearnHub Pipelines.

Business logic orchestration functions.
"""

from learnhub.pipelines.player import *
