"""Oomph IDE provisioning (Python-first, staleness-driven).

Core design goals:
- Skip setup entirely when the declared configuration is unchanged
- Drive the p2 director rather than reimplementing it
- Branding and launch configuration written from plain templates
- Setup actions run inside the installed runtime, in a child JVM
- Centralized logging
"""

__all__ = []
