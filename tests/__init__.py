"""Test suite for clipmerge.

Test Structure:
- unit/: Unit tests for individual components
  - curves/: Keyframe curve model, evaluation and resampling
  - channels/: Channel keys, channel sets and kind detection
  - timeline/: Placements, remapping, extrapolation and track building
  - merge/: Priority override, stack merging and the pipeline
  - rig/: Hierarchy, path correction and root offset
  - config/, utils/: Configuration loading, logging and math helpers
- integration/: End-to-end merges over small timelines
"""
