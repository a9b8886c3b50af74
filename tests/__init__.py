"""
Tile backup test suite.

Structure:
- unit/: planner, fetcher, compositor, publisher and config in isolation
- integration/: full runs through the pipeline and CLI against mocked HTTP
"""
