"""Recruitment API: candidate registration with legacy system synchronization."""
