"""
Audit SLA Module
================

Bounded Context for the business-day deadlines of the QA audit workflow.

Responsibilities:
- Classify business days (Mon-Fri, America/New_York)
- Compute 5 PM deadlines for acknowledgement, sign-off and dispute windows
- Evaluate deadlines for UI countdown badges and escalation sweeps
- Reject dispute and re-appeal filings once their window has closed
- Hot-reload window lengths from YAML
"""

__version__ = "1.0.0"
