"""
Application layer for the workout session engine.

This package contains:
- exceptions.py: Errors raised by use cases and repositories
- ports/: Repository and generator interfaces (what the use cases need)
- use_cases/: Create, read, lifecycle and set logging workflows
"""
