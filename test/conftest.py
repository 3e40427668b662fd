"""
Test configuration for dde tests
"""

import sys
from pathlib import Path

import pytest

# Add the src directory to the Python path
src_root = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_root))

from dde import interpret


@pytest.fixture
def run():
  """Interpret a snippet and hand back only its value"""
  def _run(source, environment=None):
    return interpret(source, environment).result
  return _run
