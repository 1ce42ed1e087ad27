"""
Tests for core.execution module

This package contains tests for all execution-related components:
- SeriesRunner: Sequential work tree runner
- clone_work_tree / is_exhausted: Working copies of work trees
- Diagnostics: Per-run diagnostics sink
"""
