"""
Collection names and index definitions for the LearnHub database.
"""

COURSES = "courses"
COURSE_CONTENT = "coursecontent"
USER_COURSE_PROGRESS = "usercourseprogress"
PLAYER_SESSIONS = "playersessions"

# Passed to MongoDB.connect(indexes=...) at startup
INDEXES = {
    USER_COURSE_PROGRESS: [
        ([("userId", 1), ("courseId", 1)], {"unique": True, "name": "user_course_unique"}),
        ([("userId", 1)], {"name": "user_lookup"}),
    ],
    COURSE_CONTENT: [
        ([("courseId", 1), ("orderIndex", 1)], {"name": "course_order"}),
    ],
    PLAYER_SESSIONS: [
        ([("userId", 1)], {"name": "player_user_lookup"}),
    ],
}
