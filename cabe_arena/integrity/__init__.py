"""
integrity/ — Submission Integrity Layer

Modules:
    checker.py    - Rule-based risk scoring and advisory flags
    messages.py   - Deterrent and engagement message pickers
"""
