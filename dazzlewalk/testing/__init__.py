"""Testing utilities for DazzleWalk consumers."""

from .fixtures import EventRecorder, build_deep_chain, build_nested_record, sample_person

__all__ = ['EventRecorder', 'sample_person', 'build_nested_record', 'build_deep_chain']
