"""
Collexa - job, internship and course marketplace backend.

Architecture:
- MongoDB: users, postings, applications, leads and content documents
- JWT session tokens (cookie or bearer) with a virtual admin principal
- Resume uploads stored on local disk under UPLOAD_DIR
"""

__version__ = "1.0.0"
