"""Services layer for VodTube.

Services implement business logic and orchestrate data operations.
Organized by feature:
- uploader: YouTube upload of archived VODs and its settings
"""
