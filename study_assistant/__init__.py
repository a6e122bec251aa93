"""
Study Assistant

A FastAPI service that turns notes, photos and documents into:
- Step-by-step solutions
- Structured study summaries
- Multiple choice question sets
"""

__version__ = "1.0.0"
