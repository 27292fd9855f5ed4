#!/usr/bin/env python3
"""
Seed script to create structured lesson and assessment content for courses.

This script:
1. Finds all courses in the 'courses' collection
2. Picks a lesson template by course title (or the general template)
3. Creates a video lesson followed by a quiz assessment for each template lesson

Usage:
    python scripts/seed_course_content.py [--dry-run]

Environment variables required:
    MONGODB_URI - MongoDB connection string
    MONGODB_DATABASE - Database name (default: learnhub)
"""

import asyncio
import json
import os
import sys

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from motor.motor_asyncio import AsyncIOMotorClient
from dotenv import load_dotenv

from learnhub.database.collections import COURSE_CONTENT, COURSES
from learnhub.repositories import MongoCrudRepository

# Load environment variables
load_dotenv()

MEDIA_BASE = "https://static.learnhub.example/media"

# Lesson media per course topic
VIDEOS = {
    "dataScience": f"{MEDIA_BASE}/data-science.png?id=data-science-animated",
    "ai": f"{MEDIA_BASE}/ai-ml.png?id=ai-ml-animated",
    "webDev": f"{MEDIA_BASE}/web-dev.png?id=web-dev-animated",
    "design": f"{MEDIA_BASE}/ux-ui.png?id=ux-ui-animated",
    "general": f"{MEDIA_BASE}/general.png?id=general-animated",
}

# (title, description, minutes)
COURSE_TEMPLATES = {
    "Advanced Data Visualization": {
        "video": VIDEOS["dataScience"],
        "lessons": [
            ("Introduction to Data Visualization Principles", "Learn the fundamental principles of effective data visualization and how to choose the right chart types for your data.", 25),
            ("Interactive Charts and Dashboards", "Create interactive visualizations that engage users and provide dynamic data exploration capabilities.", 30),
            ("Advanced Statistical Visualizations", "Master complex statistical plots including box plots, violin plots, and multi-dimensional visualizations.", 35),
            ("Real-time Data Visualization", "Build live dashboards that update in real-time with streaming data sources.", 40),
            ("Data Storytelling Techniques", "Learn how to craft compelling narratives with your data visualizations.", 30),
            ("Performance Optimization for Large Datasets", "Optimize your visualizations to handle millions of data points efficiently.", 35),
        ],
    },
    "AI & Machine Learning Principles": {
        "video": VIDEOS["ai"],
        "lessons": [
            ("Foundations of Artificial Intelligence", "Understand the history, types, and applications of AI in modern technology.", 30),
            ("Machine Learning Algorithms Overview", "Explore supervised, unsupervised, and reinforcement learning algorithms.", 35),
            ("Neural Networks and Deep Learning", "Dive deep into neural network architectures and deep learning concepts.", 45),
            ("Natural Language Processing", "Learn how AI understands and processes human language.", 40),
            ("Computer Vision Fundamentals", "Discover how machines can see and interpret visual information.", 35),
            ("AI Ethics and Responsible Development", "Understand the ethical implications and responsible practices in AI development.", 25),
            ("Building Your First AI Application", "Put theory into practice by building a complete AI-powered application.", 50),
        ],
    },
    "Secure Backend Development": {
        "video": VIDEOS["webDev"],
        "lessons": [
            ("Backend Security Fundamentals", "Learn the core principles of secure backend development and common vulnerabilities.", 30),
            ("Authentication and Authorization", "Implement robust user authentication and role-based access control systems.", 35),
            ("API Security Best Practices", "Secure your APIs with proper validation, rate limiting, and encryption.", 40),
            ("Database Security and Encryption", "Protect sensitive data with encryption, secure queries, and access controls.", 35),
            ("Server Hardening and Monitoring", "Configure secure servers and implement comprehensive monitoring systems.", 30),
            ("Incident Response and Recovery", "Prepare for and respond to security incidents effectively.", 25),
        ],
    },
    "UX/UI Design Fundamentals": {
        "video": VIDEOS["design"],
        "lessons": [
            ("Design Thinking and User Research", "Master the design thinking process and conduct effective user research.", 30),
            ("Information Architecture and Wireframing", "Structure information effectively and create detailed wireframes.", 35),
            ("Visual Design Principles", "Apply color theory, typography, and layout principles to create beautiful interfaces.", 40),
            ("Prototyping and User Testing", "Build interactive prototypes and conduct user testing sessions.", 35),
            ("Responsive and Accessible Design", "Design interfaces that work across devices and are accessible to all users.", 30),
            ("Design Systems and Component Libraries", "Create scalable design systems and maintain consistency across products.", 25),
            ("Advanced Interaction Design", "Design complex interactions and micro-animations that enhance user experience.", 40),
        ],
    },
}

GENERAL_TEMPLATE = {
    "video": VIDEOS["general"],
    "lessons": [
        ("Introduction", "Course introduction and overview", 20),
        ("Fundamentals", "Core concepts and principles", 30),
        ("Practical Applications", "Real-world applications and examples", 35),
        ("Advanced Concepts", "Advanced topics and techniques", 40),
        ("Best Practices", "Industry best practices and standards", 30),
        ("Final Project", "Capstone project and implementation", 45),
    ],
}

ASSESSMENT_MINUTES = 15


def media_variant(video_url: str, prefix: str) -> str:
    return video_url.replace("?id=", f"?id={prefix}-")


def build_lesson(course_id: str, number: int, order_index: int, video_url: str, lesson: tuple) -> dict:
    title, description, minutes = lesson
    return {
        "courseId": course_id,
        "title": f"Lesson {number}: {title}",
        "contentType": "video",
        "description": description,
        "orderIndex": order_index,
        "estimatedDurationMinutes": minutes,
        "videoLectureUrl": video_url,
        "captionsHindi": f"{media_variant(video_url, 'hindi')}-captions.vtt",
        "captionsTamil": f"{media_variant(video_url, 'tamil')}-captions.vtt",
        "captionsTelugu": f"{media_variant(video_url, 'telugu')}-captions.vtt",
        "downloadableNotes": f"{media_variant(video_url, 'notes')}-lesson-{number}.pdf",
        "thumbnailImage": video_url,
        "textContent": (
            f"This lesson covers {description.lower()}. "
            "You'll learn through animated examples and interactive demonstrations."
        ),
    }


def build_questions(lesson_title: str) -> list:
    return [
        {
            "id": "1",
            "type": "multiple-choice",
            "question": f"What is the primary goal of {lesson_title.lower()}?",
            "options": ["To memorize facts", "To understand concepts and apply them", "To complete assignments", "To pass the test"],
            "correctAnswer": 1,
        },
        {
            "id": "2",
            "type": "multiple-choice",
            "question": "Which of the following best describes the key principle covered?",
            "options": ["It's optional to learn", "It's fundamental to the field", "It's outdated information", "It's only for experts"],
            "correctAnswer": 1,
        },
        {
            "id": "3",
            "type": "essay",
            "question": f"Based on the {lesson_title} content, how would you approach solving a real-world problem?",
            "points": 10,
        },
        {
            "id": "4",
            "type": "essay",
            "question": f"Identify three key takeaways from {lesson_title} and explain how you would apply them.",
            "points": 15,
        },
    ]


def build_assessment(course_id: str, number: int, order_index: int, lesson: tuple) -> dict:
    title = lesson[0]
    return {
        "courseId": course_id,
        "title": f"Assessment {number}: {title} Quiz",
        "contentType": "assessment",
        "description": (
            f"Comprehensive assessment to test your understanding of {title.lower()}. "
            "Includes multiple choice questions and practical scenarios."
        ),
        "orderIndex": order_index,
        "estimatedDurationMinutes": ASSESSMENT_MINUTES,
        "textContent": json.dumps({
            "questions": build_questions(title),
            "totalPoints": 30,
            "passingScore": 21,
            "timeLimit": ASSESSMENT_MINUTES,
        }),
    }


def build_course_content(course: dict) -> list:
    """Lesson and assessment records for one course, in display order."""
    template = COURSE_TEMPLATES.get(course.get("titleEn") or "", GENERAL_TEMPLATE)

    items = []
    order_index = 1
    for number, lesson in enumerate(template["lessons"], start=1):
        items.append(build_lesson(course["_id"], number, order_index, template["video"], lesson))
        items.append(build_assessment(course["_id"], number, order_index + 1, lesson))
        order_index += 2
    return items


async def seed_course_content(dry_run: bool = False):
    """Create lesson and assessment content for every course."""

    # Connect to MongoDB
    mongodb_uri = os.getenv("MONGODB_URI")
    database_name = os.getenv("MONGODB_DATABASE", "learnhub")

    if not mongodb_uri:
        print("ERROR: MONGODB_URI environment variable not set")
        sys.exit(1)

    print(f"Connecting to database: {database_name}")
    client = AsyncIOMotorClient(mongodb_uri)
    repository = MongoCrudRepository(client[database_name])

    try:
        courses = await repository.get_all(COURSES)
        print(f"Found {len(courses)} courses to populate with content")

        total = 0
        for course in courses:
            items = build_course_content(course)
            title = course.get("titleEn") or "General Course"

            if dry_run:
                print(f"[DRY RUN] Would create {len(items)} content items for course: {title}")
                continue

            for item in items:
                await repository.create(COURSE_CONTENT, item)
            total += len(items)
            print(f"Created {len(items)} content items for course: {title}")

        print("\n" + "=" * 50)
        print("Seeding complete!")
        print(f"  Content items created: {total}")
        print("=" * 50)
    finally:
        client.close()


if __name__ == "__main__":
    asyncio.run(seed_course_content(dry_run="--dry-run" in sys.argv))
