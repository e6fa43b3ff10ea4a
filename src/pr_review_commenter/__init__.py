# src/pr_review_commenter/__init__.py
__version__ = "0.1.0"
