"""
RecruitFlow - hiring workflow core.

Jobs, candidate applications, interviews and fit scores, with the
lifecycle rules and listing contract that tie them together.
"""

__version__ = "0.1.0"
__app_name__ = "RecruitFlow"
