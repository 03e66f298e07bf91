"""Test suite for particlefx.

Test Structure:
- unit/: Unit tests for individual components
  - curves/: Splines, property values, codec and sampling
  - editing/: Undo history, property models, view state and the edit session
  - modifiers/: Modifier descriptions and nodes
  - config/, utils/, cli/: Ambient infrastructure
- conftest.py: Shared fixtures and test configuration
"""
