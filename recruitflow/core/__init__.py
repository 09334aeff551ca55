"""
Core business logic modules for RecruitFlow.

Submodules:
- lifecycle: Candidate and interview status transition rules
- scoring: Candidate-job fit scoring engine
"""
