"""
LearnHub Schemas.

Pydantic models for records and request/response validation.
"""

from learnhub.schemas.course import *
from learnhub.schemas.progress import *
from learnhub.schemas.learning import *
from learnhub.schemas.certificates import *
from learnhub.schemas.admin import *
from learnhub.schemas.player import *
