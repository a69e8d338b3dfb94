"""Process tree discovery — who did a component spawn?

This package provides:
- table: run ps and turn its pid/ppid rows into a parent -> children forest
- resolver: walk the forest to collect every descendant of a root pid
- killer: signal a whole process tree, children first
"""
